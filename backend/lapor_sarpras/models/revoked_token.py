from sqlalchemy import Column, DateTime, Integer, String, func
from lapor_sarpras.core.database import Base


class RevokedToken(Base):
    __tablename__ = "revoked_tokens"

    id = Column(Integer, primary_key=True, index=True)

    jti = Column(String, unique=True, index=True, nullable=False)
    # rows past this point can be purged, the JWT itself is expired
    expires_at = Column(DateTime, nullable=False)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
