"""
Domain errors for the Lapor Sarpras API.

Services raise these directly; the handlers registered in ``main.py`` turn
them into ``{"success": false, "message": ...}`` responses with the matching
HTTP status.

Usage:
    from lapor_sarpras.core.exceptions import NotFound

    laporan = db.get(Laporan, laporan_id)
    if not laporan:
        raise NotFound("Laporan not found")
"""

from typing import Optional


class LaporError(Exception):
    """Base exception for all domain errors"""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(LaporError):
    """Missing, invalid, expired or revoked credential"""

    status_code = 401
    default_message = "Not authenticated"


class Forbidden(LaporError):
    """Valid credential, insufficient role or not the owner"""

    status_code = 403
    default_message = "Access denied"


class NotFound(LaporError):
    status_code = 404
    default_message = "Not found"


class Conflict(LaporError):
    """Uniqueness violation or an operation blocked by existing data"""

    status_code = 409
    default_message = "Conflict"


class ValidationFailed(LaporError):
    status_code = 400
    default_message = "Invalid input"


class Internal(LaporError):
    status_code = 500
    default_message = "Internal server error"
