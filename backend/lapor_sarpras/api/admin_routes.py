# backend/lapor_sarpras/api/admin_routes.py

import csv
import io
from typing import List, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from lapor_sarpras.api.deps import get_db, get_ip, require_admin
from lapor_sarpras.api.schemas import (
    ApiResponse,
    AuditLogOut,
    DashboardOut,
    LaporanOut,
    StatusUpdate,
    UserOut,
)
from lapor_sarpras.core.security import CurrentUser
from lapor_sarpras.models.enums import LaporanStatus
from lapor_sarpras.services import laporan as laporan_service
from lapor_sarpras.services import users as users_service
from lapor_sarpras.services.audit import list_audit_logs
from lapor_sarpras.services.dashboard import dashboard_summary

# every route here is admin only
router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/dashboard", response_model=ApiResponse[DashboardOut])
def dashboard(db: Session = Depends(get_db)):
    return ApiResponse(data=dashboard_summary(db))


@router.patch("/laporan/{laporan_id}/status", response_model=ApiResponse[LaporanOut])
def update_laporan_status(
    laporan_id: int,
    payload: StatusUpdate,
    request: Request,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
):
    laporan_service.update_status(
        db,
        laporan_id,
        status=payload.status,
        catatan_admin=payload.catatan_admin,
        override=payload.override,
        actor=user,
        ip=get_ip(request),
    )
    return ApiResponse(
        data=laporan_service.get_laporan_detail(db, laporan_id),
        message="Status updated successfully",
    )


@router.get("/laporan.csv")
def export_laporan_csv(
    status: Optional[LaporanStatus] = None,
    db: Session = Depends(get_db),
):
    rows = laporan_service.list_laporan(db, status=status)

    buf = io.StringIO()
    w = csv.writer(buf)
    w.writerow(
        [
            "id",
            "tanggal_laporan",
            "kode_sarpras",
            "nama_sarpras",
            "lokasi",
            "pelapor",
            "deskripsi",
            "status",
            "catatan_admin",
            "created_at",
        ]
    )

    for r in rows:
        w.writerow(
            [
                r["id"],
                r["tanggal_laporan"].isoformat(),
                r["kode_sarpras"],
                r["nama_sarpras"],
                r["lokasi"] or "",
                r["nama_pelapor"],
                r["deskripsi"],
                r["status"],
                r["catatan_admin"] or "",
                r["created_at"].isoformat() if r["created_at"] else "",
            ]
        )

    return StreamingResponse(
        io.BytesIO(buf.getvalue().encode("utf-8")),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="laporan.csv"'},
    )


@router.get("/users", response_model=ApiResponse[List[UserOut]])
def list_users(db: Session = Depends(get_db)):
    return ApiResponse(data=[UserOut.model_validate(u) for u in users_service.list_users(db)])


@router.delete("/users/{user_id}", response_model=ApiResponse[None])
def delete_user(
    user_id: int,
    request: Request,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
):
    users_service.delete_user(db, user_id=user_id, actor=user, ip=get_ip(request))
    return ApiResponse(message="User deleted successfully")


@router.get("/audit-logs", response_model=ApiResponse[List[AuditLogOut]])
def audit_logs(
    entity: Optional[str] = None,
    entity_id: Optional[int] = None,
    limit: int = 50,
    db: Session = Depends(get_db),
):
    logs = list_audit_logs(db, entity=entity, entity_id=entity_id, limit=limit)
    return ApiResponse(data=[AuditLogOut.model_validate(x) for x in logs])
