# import every model so Base.metadata knows all tables
from lapor_sarpras.models.user import User
from lapor_sarpras.models.sarpras import Sarpras
from lapor_sarpras.models.laporan import Laporan
from lapor_sarpras.models.audit_log import AuditLog
from lapor_sarpras.models.revoked_token import RevokedToken

__all__ = ["User", "Sarpras", "Laporan", "AuditLog", "RevokedToken"]
