from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from lapor_sarpras.core.database import Base
from lapor_sarpras.models.enums import LaporanStatus


class Laporan(Base):
    __tablename__ = "laporan"

    __table_args__ = (
        CheckConstraint(
            "status IN ('menunggu', 'diproses', 'selesai')",
            name="ck_laporan_status",
        ),
        Index("ix_laporan_status", "status"),
        Index("ix_laporan_created_at", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)

    # owner, immutable after creation
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sarpras_id = Column(
        Integer,
        ForeignKey("sarpras.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    deskripsi = Column(Text, nullable=False)
    # snapshot of the asset location unless given explicitly
    lokasi = Column(String, nullable=True)
    tanggal_laporan = Column(Date, nullable=False)
    foto = Column(String, nullable=True)

    status = Column(String, nullable=False, default=LaporanStatus.MENUNGGU.value)
    catatan_admin = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    pelapor = relationship("User", back_populates="laporan")
    sarpras = relationship("Sarpras", back_populates="laporan")
