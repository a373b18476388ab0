"""
Identity and session operations: register, login, logout, and the admin
user management used by ``/admin/users``.
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lapor_sarpras.core.exceptions import Conflict, Forbidden, NotFound, Unauthenticated
from lapor_sarpras.core.security import (
    CurrentUser,
    create_access_token,
    hash_password,
    verify_password,
)
from lapor_sarpras.models.enums import Role
from lapor_sarpras.models.laporan import Laporan
from lapor_sarpras.models.revoked_token import RevokedToken
from lapor_sarpras.models.user import User
from lapor_sarpras.services.audit import add_audit_log
from lapor_sarpras.services.uploads import delete_photo

logger = logging.getLogger(__name__)

# one message for unknown user, wrong role and wrong password
INVALID_CREDENTIALS = "Username atau password salah"


def register_user(
    db: Session,
    *,
    username: str,
    password: str,
    nama: str,
    email: str,
    role: Role = Role.USER,
) -> User:
    existing = (
        db.query(User)
        .filter(or_(User.username == username, User.email == email))
        .first()
    )
    if existing:
        raise Conflict("Username atau email sudah digunakan")

    user = User(
        username=username,
        email=email,
        nama=nama,
        role=Role(role).value,
        password_hash=hash_password(password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race against a concurrent registration
        db.rollback()
        raise Conflict("Username atau email sudah digunakan")
    db.refresh(user)

    logger.info("Registered user id=%s username=%s role=%s", user.id, user.username, user.role)
    return user


def authenticate(
    db: Session,
    *,
    username: str,
    password: str,
    role: Optional[Role] = None,
) -> Tuple[str, User]:
    """Check credentials and issue a signed token. Returns (token, user)."""
    q = db.query(User).filter(User.username == username.strip())
    if role is not None:
        q = q.filter(User.role == Role(role).value)
    user = q.first()

    if not user or not verify_password(password, user.password_hash):
        logger.info("Failed login for username=%s", username)
        raise Unauthenticated(INVALID_CREDENTIALS)

    token = create_access_token({"sub": str(user.id), "username": user.username, "role": user.role})
    logger.info("User id=%s logged in", user.id)
    return token, user


def revoke_token(db: Session, *, jti: str, exp: int) -> None:
    if not jti:
        return
    if db.query(RevokedToken).filter(RevokedToken.jti == jti).first():
        return
    db.add(RevokedToken(jti=jti, expires_at=datetime.utcfromtimestamp(exp)))
    db.commit()


def is_token_revoked(db: Session, jti: Optional[str]) -> bool:
    if not jti:
        return False
    return db.query(RevokedToken.id).filter(RevokedToken.jti == jti).first() is not None


def purge_expired_tokens(db: Session) -> int:
    n = (
        db.query(RevokedToken)
        .filter(RevokedToken.expires_at < datetime.utcnow())
        .delete(synchronize_session=False)
    )
    db.commit()
    return n


def list_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()


def delete_user(db: Session, *, user_id: int, actor: CurrentUser, ip: Optional[str] = None) -> None:
    if user_id == actor.id:
        raise Forbidden("Cannot delete your own account")

    user = db.get(User, user_id)
    if not user:
        raise NotFound("User not found")

    add_audit_log(
        db,
        action="user_delete",
        entity="user",
        entity_id=user.id,
        summary=f"{user.username} ({user.role})",
        actor=actor.display_name,
        ip=ip,
    )
    fotos = [
        foto
        for (foto,) in db.query(Laporan.foto).filter(Laporan.user_id == user.id, Laporan.foto.isnot(None))
    ]

    # reports owned by the user go with it (ON DELETE CASCADE)
    db.delete(user)
    db.commit()

    for foto in fotos:
        delete_photo(foto)

    logger.info("User id=%s deleted by admin id=%s", user_id, actor.id)
