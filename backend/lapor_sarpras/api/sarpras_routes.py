# backend/lapor_sarpras/api/sarpras_routes.py

import io
from typing import List

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from lapor_sarpras.api.deps import get_current_user, get_db, get_ip, require_admin
from lapor_sarpras.api.schemas import (
    ApiResponse,
    CreatedId,
    SarprasCreate,
    SarprasOut,
    SarprasUpdate,
)
from lapor_sarpras.core.security import CurrentUser
from lapor_sarpras.services import sarpras as sarpras_service
from lapor_sarpras.services.qr import decode_data_url, generate_qr_png

router = APIRouter()

# ---------- SARPRAS (user+admin can read) ----------


@router.get("", response_model=ApiResponse[List[SarprasOut]])
def list_sarpras(
    db: Session = Depends(get_db),
    _user: CurrentUser = Depends(get_current_user),
):
    return ApiResponse(data=[SarprasOut.model_validate(s) for s in sarpras_service.list_sarpras(db)])


# scan-to-report entry point: the decoded QR payload goes in verbatim
@router.get("/qr/{kode:path}", response_model=ApiResponse[SarprasOut])
def get_sarpras_by_kode(
    kode: str,
    db: Session = Depends(get_db),
    _user: CurrentUser = Depends(get_current_user),
):
    return ApiResponse(data=SarprasOut.model_validate(sarpras_service.get_sarpras_by_kode(db, kode)))


@router.get("/{sarpras_id}", response_model=ApiResponse[SarprasOut])
def get_sarpras(
    sarpras_id: int,
    db: Session = Depends(get_db),
    _user: CurrentUser = Depends(get_current_user),
):
    return ApiResponse(data=SarprasOut.model_validate(sarpras_service.get_sarpras(db, sarpras_id)))


@router.get("/{sarpras_id}/qr.png")
def get_sarpras_qr_png(
    sarpras_id: int,
    db: Session = Depends(get_db),
    _user: CurrentUser = Depends(get_current_user),
):
    s = sarpras_service.get_sarpras(db, sarpras_id)
    png = decode_data_url(s.qr_code) if s.qr_code else generate_qr_png(s.kode_sarpras)

    return StreamingResponse(
        io.BytesIO(png),
        media_type="image/png",
        headers={"Content-Disposition": f'inline; filename="qr-{s.id}.png"'},
    )


# ---------- SARPRAS (admin only can write) ----------


@router.post("", response_model=ApiResponse[CreatedId], status_code=status.HTTP_201_CREATED)
def create_sarpras(
    payload: SarprasCreate,
    request: Request,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
):
    s = sarpras_service.create_sarpras(
        db,
        kode_sarpras=payload.kode_sarpras,
        nama_sarpras=payload.nama_sarpras,
        kategori=payload.kategori,
        lokasi=payload.lokasi,
        kondisi=payload.kondisi,
        actor=user,
        ip=get_ip(request),
    )
    return ApiResponse(data=CreatedId(id=s.id), message="Sarpras created successfully")


@router.put("/{sarpras_id}", response_model=ApiResponse[SarprasOut])
def update_sarpras(
    sarpras_id: int,
    payload: SarprasUpdate,
    request: Request,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
):
    s = sarpras_service.update_sarpras(
        db,
        sarpras_id,
        payload.model_dump(exclude_unset=True),
        actor=user,
        ip=get_ip(request),
    )
    return ApiResponse(data=SarprasOut.model_validate(s), message="Sarpras updated successfully")


@router.delete("/{sarpras_id}", response_model=ApiResponse[None])
def delete_sarpras(
    sarpras_id: int,
    request: Request,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(require_admin),
):
    sarpras_service.delete_sarpras(db, sarpras_id, actor=user, ip=get_ip(request))
    return ApiResponse(message="Sarpras deleted successfully")
