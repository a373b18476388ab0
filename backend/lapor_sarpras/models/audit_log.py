from sqlalchemy import Column, DateTime, Integer, String, func
from lapor_sarpras.core.database import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)

    # what happened
    action = Column(String, nullable=False)  # e.g. "laporan_status", "sarpras_create"

    # on what
    entity = Column(String, nullable=False, index=True)  # "laporan" | "sarpras" | "user"
    entity_id = Column(Integer, nullable=False, index=True)
    summary = Column(String, nullable=True)

    # who/where
    actor = Column(String, nullable=False, default="system")
    ip = Column(String, nullable=True)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
