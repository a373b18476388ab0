"""
Report ("laporan") lifecycle.

- any authenticated user files a report against an active asset and owns it
- only the owner edits the report body (deskripsi/lokasi/tanggal/foto)
- only admins change status, forward-only unless they pass ``override``
- the owner or any admin deletes
"""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from lapor_sarpras.core.exceptions import Forbidden, NotFound, ValidationFailed
from lapor_sarpras.core.security import CurrentUser
from lapor_sarpras.models.enums import LaporanStatus
from lapor_sarpras.models.laporan import Laporan
from lapor_sarpras.models.sarpras import Sarpras
from lapor_sarpras.models.user import User
from lapor_sarpras.services.audit import add_audit_log
from lapor_sarpras.services.status import check_transition
from lapor_sarpras.services.uploads import delete_photo

logger = logging.getLogger(__name__)


def _joined_query(db: Session):
    return (
        db.query(
            Laporan,
            Sarpras.nama_sarpras,
            Sarpras.kode_sarpras,
            Sarpras.kategori,
            User.nama.label("nama_pelapor"),
            User.email,
        )
        .join(Sarpras, Laporan.sarpras_id == Sarpras.id)
        .join(User, Laporan.user_id == User.id)
    )


def _row_to_dict(row) -> dict:
    laporan, nama_sarpras, kode_sarpras, kategori, nama_pelapor, email = row
    return {
        "id": laporan.id,
        "user_id": laporan.user_id,
        "sarpras_id": laporan.sarpras_id,
        "deskripsi": laporan.deskripsi,
        "lokasi": laporan.lokasi,
        "tanggal_laporan": laporan.tanggal_laporan,
        "foto": laporan.foto,
        "status": laporan.status,
        "catatan_admin": laporan.catatan_admin,
        "created_at": laporan.created_at,
        "updated_at": laporan.updated_at,
        "nama_sarpras": nama_sarpras,
        "kode_sarpras": kode_sarpras,
        "kategori": kategori,
        "nama_pelapor": nama_pelapor,
        "email": email,
    }


def list_laporan(
    db: Session,
    *,
    status: Optional[LaporanStatus] = None,
    user_id: Optional[int] = None,
    limit: Optional[int] = None,
    offset: int = 0,
) -> List[dict]:
    q = _joined_query(db).order_by(Laporan.created_at.desc(), Laporan.id.desc())

    if status is not None:
        q = q.filter(Laporan.status == LaporanStatus(status).value)
    if user_id is not None:
        q = q.filter(Laporan.user_id == user_id)

    if offset:
        q = q.offset(offset)
    if limit is not None:
        q = q.limit(limit)

    return [_row_to_dict(r) for r in q.all()]


def get_laporan_detail(db: Session, laporan_id: int) -> dict:
    row = _joined_query(db).filter(Laporan.id == laporan_id).first()
    if not row:
        raise NotFound("Laporan not found")
    return _row_to_dict(row)


def _get_laporan(db: Session, laporan_id: int) -> Laporan:
    laporan = db.get(Laporan, laporan_id)
    if not laporan:
        raise NotFound("Laporan not found")
    return laporan


def create_laporan(
    db: Session,
    *,
    sarpras_id: int,
    deskripsi: str,
    tanggal_laporan: date,
    lokasi: Optional[str] = None,
    foto: Optional[str] = None,
    actor: CurrentUser,
    ip: Optional[str] = None,
) -> Laporan:
    deskripsi = (deskripsi or "").strip()
    if not deskripsi:
        raise ValidationFailed("Deskripsi wajib diisi")

    # lock the asset row until the report is committed so an archive can't
    # slip in between the check and the insert
    sarpras = (
        db.query(Sarpras)
        .filter(Sarpras.id == sarpras_id, Sarpras.is_active == True)
        .with_for_update()
        .first()
    )
    if not sarpras:
        raise NotFound("Sarpras not found")

    laporan = Laporan(
        user_id=actor.id,
        sarpras_id=sarpras.id,
        deskripsi=deskripsi,
        lokasi=(lokasi or "").strip() or sarpras.lokasi,
        tanggal_laporan=tanggal_laporan,
        foto=foto,
        status=LaporanStatus.MENUNGGU.value,
    )
    db.add(laporan)
    db.flush()

    add_audit_log(
        db,
        action="laporan_create",
        entity="laporan",
        entity_id=laporan.id,
        summary=f"sarpras {sarpras.kode_sarpras}",
        actor=actor.display_name,
        ip=ip,
    )
    db.commit()
    db.refresh(laporan)

    logger.info(
        "Laporan id=%s created by user id=%s for sarpras id=%s",
        laporan.id, actor.id, sarpras.id,
    )
    return laporan


def update_laporan(
    db: Session,
    laporan_id: int,
    *,
    actor: CurrentUser,
    deskripsi: Optional[str] = None,
    lokasi: Optional[str] = None,
    tanggal_laporan: Optional[date] = None,
    foto: Optional[str] = None,
    ip: Optional[str] = None,
) -> Laporan:
    """Owner-only partial update; fields left as None are untouched."""
    laporan = _get_laporan(db, laporan_id)
    if laporan.user_id != actor.id:
        raise Forbidden("Access denied")

    if deskripsi is not None:
        deskripsi = deskripsi.strip()
        if not deskripsi:
            raise ValidationFailed("Deskripsi wajib diisi")
        laporan.deskripsi = deskripsi
    if lokasi is not None and lokasi.strip():
        laporan.lokasi = lokasi.strip()
    if tanggal_laporan is not None:
        laporan.tanggal_laporan = tanggal_laporan
    replaced_foto = None
    if foto is not None:
        replaced_foto = laporan.foto
        laporan.foto = foto

    add_audit_log(
        db,
        action="laporan_update",
        entity="laporan",
        entity_id=laporan.id,
        actor=actor.display_name,
        ip=ip,
    )
    db.commit()
    db.refresh(laporan)

    delete_photo(replaced_foto)
    return laporan


def update_status(
    db: Session,
    laporan_id: int,
    *,
    status: LaporanStatus,
    catatan_admin: Optional[str] = None,
    override: bool = False,
    actor: CurrentUser,
    ip: Optional[str] = None,
) -> Laporan:
    if not actor.is_admin:
        raise Forbidden("Admin role required")

    laporan = _get_laporan(db, laporan_id)

    current = LaporanStatus(laporan.status)
    new = LaporanStatus(status)
    check_transition(current, new, override=override)

    laporan.status = new.value
    laporan.catatan_admin = catatan_admin or None

    add_audit_log(
        db,
        action="laporan_status",
        entity="laporan",
        entity_id=laporan.id,
        summary=f"{current.value} -> {new.value}" + (" (override)" if override and current != new else ""),
        actor=actor.display_name,
        ip=ip,
    )
    db.commit()
    db.refresh(laporan)

    logger.info(
        "Laporan id=%s status %s -> %s by admin id=%s",
        laporan.id, current.value, new.value, actor.id,
    )
    return laporan


def delete_laporan(
    db: Session,
    laporan_id: int,
    *,
    actor: CurrentUser,
    ip: Optional[str] = None,
) -> None:
    """Delete if owner or admin, along with its stored photo."""
    laporan = _get_laporan(db, laporan_id)
    if laporan.user_id != actor.id and not actor.is_admin:
        raise Forbidden("Access denied")

    foto = laporan.foto

    add_audit_log(
        db,
        action="laporan_delete",
        entity="laporan",
        entity_id=laporan.id,
        actor=actor.display_name,
        ip=ip,
    )
    db.delete(laporan)
    db.commit()
    delete_photo(foto)

    logger.info("Laporan id=%s deleted by user id=%s", laporan_id, actor.id)
