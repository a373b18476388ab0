"""
Asset registry ("sarpras").

Assets are looked up by id or by the code printed on their QR sticker.
Deleting an asset archives it (``is_active = False``) so reports filed
against it keep their join; an asset with unfinished reports cannot be
deleted at all.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lapor_sarpras.core.exceptions import Conflict, NotFound
from lapor_sarpras.core.security import CurrentUser
from lapor_sarpras.models.enums import DEFAULT_KONDISI
from lapor_sarpras.models.laporan import Laporan
from lapor_sarpras.models.sarpras import Sarpras
from lapor_sarpras.services.audit import add_audit_log
from lapor_sarpras.services.qr import generate_qr_data_url
from lapor_sarpras.services.status import TERMINAL_STATUSES

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("nama_sarpras", "kategori", "lokasi", "kondisi")


def list_sarpras(db: Session) -> List[Sarpras]:
    return (
        db.query(Sarpras)
        .filter(Sarpras.is_active == True)
        .order_by(Sarpras.created_at.desc(), Sarpras.id.desc())
        .all()
    )


def get_sarpras(db: Session, sarpras_id: int) -> Sarpras:
    s = db.get(Sarpras, sarpras_id)
    if not s or not s.is_active:
        raise NotFound("Sarpras not found")
    return s


def get_sarpras_by_kode(db: Session, kode: str) -> Sarpras:
    # scanned payload is used verbatim: no strip, no case folding
    s = (
        db.query(Sarpras)
        .filter(Sarpras.kode_sarpras == kode, Sarpras.is_active == True)
        .first()
    )
    if not s:
        raise NotFound("Sarpras not found")
    return s


def create_sarpras(
    db: Session,
    *,
    kode_sarpras: str,
    nama_sarpras: str,
    kategori: Optional[str] = None,
    lokasi: Optional[str] = None,
    kondisi: Optional[str] = None,
    actor: CurrentUser,
    ip: Optional[str] = None,
) -> Sarpras:
    # archived assets still own their code
    if db.query(Sarpras.id).filter(Sarpras.kode_sarpras == kode_sarpras).first():
        raise Conflict("Kode sarpras sudah digunakan")

    s = Sarpras(
        kode_sarpras=kode_sarpras,
        nama_sarpras=nama_sarpras.strip(),
        kategori=kategori,
        lokasi=lokasi,
        kondisi=kondisi or DEFAULT_KONDISI,
        qr_code=generate_qr_data_url(kode_sarpras),
        is_active=True,
    )
    db.add(s)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise Conflict("Kode sarpras sudah digunakan")

    add_audit_log(
        db,
        action="sarpras_create",
        entity="sarpras",
        entity_id=s.id,
        summary=f"{s.kode_sarpras} {s.nama_sarpras}",
        actor=actor.display_name,
        ip=ip,
    )
    db.commit()
    db.refresh(s)

    logger.info("Sarpras id=%s kode=%s created by user id=%s", s.id, s.kode_sarpras, actor.id)
    return s


def update_sarpras(
    db: Session,
    sarpras_id: int,
    changes: dict,
    *,
    actor: CurrentUser,
    ip: Optional[str] = None,
) -> Sarpras:
    s = get_sarpras(db, sarpras_id)

    applied = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
    for k, v in applied.items():
        setattr(s, k, v)

    add_audit_log(
        db,
        action="sarpras_update",
        entity="sarpras",
        entity_id=s.id,
        summary=", ".join(f"{k}={v}" for k, v in applied.items()) or None,
        actor=actor.display_name,
        ip=ip,
    )
    db.commit()
    db.refresh(s)
    return s


def count_open_laporan(db: Session, sarpras_id: int) -> int:
    return (
        db.query(Laporan)
        .filter(
            Laporan.sarpras_id == sarpras_id,
            Laporan.status.notin_([s.value for s in TERMINAL_STATUSES]),
        )
        .count()
    )


def delete_sarpras(
    db: Session,
    sarpras_id: int,
    *,
    actor: CurrentUser,
    ip: Optional[str] = None,
) -> None:
    s = get_sarpras(db, sarpras_id)

    open_count = count_open_laporan(db, s.id)
    if open_count:
        raise Conflict(
            f"Sarpras masih memiliki {open_count} laporan yang belum selesai"
        )

    add_audit_log(
        db,
        action="sarpras_delete",
        entity="sarpras",
        entity_id=s.id,
        summary=f"{s.kode_sarpras} {s.nama_sarpras}",
        actor=actor.display_name,
        ip=ip,
    )

    s.is_active = False
    db.commit()

    logger.info("Sarpras id=%s archived by user id=%s", s.id, actor.id)
