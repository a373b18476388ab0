# backend/lapor_sarpras/api/deps.py

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from lapor_sarpras.core.database import SessionLocal
from lapor_sarpras.core.exceptions import Forbidden, Unauthenticated
from lapor_sarpras.core.security import CurrentUser, decode_token
from lapor_sarpras.models.user import User as UserModel
from lapor_sarpras.services.users import is_token_revoked

# tokenUrl is ONLY used by Swagger UI for the "Authorize" flow.
# auto_error=False so a missing header goes through our own 401 envelope.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> CurrentUser:
    # token must be the raw JWT (OAuth2PasswordBearer strips "Bearer ")
    if not token:
        raise Unauthenticated()

    try:
        payload = decode_token(token)
    except ValueError:
        raise Unauthenticated("Invalid or expired token")

    sub = payload.get("sub")
    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        raise Unauthenticated("Invalid or expired token")

    if is_token_revoked(db, payload.get("jti")):
        raise Unauthenticated("Token has been revoked")

    user = db.get(UserModel, user_id)
    if not user:
        raise Unauthenticated()

    current = CurrentUser(
        id=user.id,
        username=user.username,
        nama=user.nama,
        role=user.role,
        jti=payload.get("jti"),
        exp=payload.get("exp"),
    )
    request.state.user = current
    return current


def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not user.is_admin:
        raise Forbidden("Admin role required")
    return user


def get_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None
