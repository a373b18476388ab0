from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    Boolean,
    Index,
)
from sqlalchemy.orm import relationship
from datetime import datetime

from lapor_sarpras.core.database import Base
from lapor_sarpras.models.enums import DEFAULT_KONDISI


class Sarpras(Base):
    __tablename__ = "sarpras"

    __table_args__ = (
        Index("ix_sarpras_kategori", "kategori"),
    )

    id = Column(Integer, primary_key=True, index=True)

    # printed on the QR sticker, never changes
    kode_sarpras = Column(String, unique=True, index=True, nullable=False)
    nama_sarpras = Column(String, nullable=False)
    kategori = Column(String, nullable=True)
    lokasi = Column(String, nullable=True)
    kondisi = Column(String, nullable=False, default=DEFAULT_KONDISI)

    # PNG data URL
    qr_code = Column(Text, nullable=True)

    # soft delete (archived assets keep their reports resolvable)
    is_active = Column(Boolean, nullable=False, default=True)

    # timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    laporan = relationship("Laporan", back_populates="sarpras")
