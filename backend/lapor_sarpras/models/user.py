from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from lapor_sarpras.core.database import Base
from lapor_sarpras.models.enums import Role


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    nama = Column(String, nullable=False)

    # "admin" | "user"
    role = Column(String, nullable=False, default=Role.USER.value)

    password_hash = Column(String, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    laporan = relationship(
        "Laporan",
        back_populates="pelapor",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
