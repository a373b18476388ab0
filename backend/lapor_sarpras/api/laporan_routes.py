# backend/lapor_sarpras/api/laporan_routes.py

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status
from sqlalchemy.orm import Session

from lapor_sarpras.api.deps import get_current_user, get_db, get_ip
from lapor_sarpras.api.schemas import ApiResponse, CreatedId, LaporanDetail, LaporanOut
from lapor_sarpras.core.security import CurrentUser
from lapor_sarpras.models.enums import LaporanStatus
from lapor_sarpras.services import laporan as laporan_service
from lapor_sarpras.services.uploads import delete_photo, save_photo

router = APIRouter()


@router.get("", response_model=ApiResponse[List[LaporanOut]])
def list_laporan(
    status: Optional[LaporanStatus] = None,
    user_id: Optional[int] = None,
    limit: Optional[int] = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
    _user: CurrentUser = Depends(get_current_user),
):
    rows = laporan_service.list_laporan(
        db, status=status, user_id=user_id, limit=limit, offset=offset
    )
    return ApiResponse(data=rows)


@router.get("/{laporan_id}", response_model=ApiResponse[LaporanDetail])
def get_laporan(
    laporan_id: int,
    db: Session = Depends(get_db),
    _user: CurrentUser = Depends(get_current_user),
):
    return ApiResponse(data=laporan_service.get_laporan_detail(db, laporan_id))


@router.post("", response_model=ApiResponse[CreatedId], status_code=status.HTTP_201_CREATED)
def create_laporan(
    request: Request,
    sarpras_id: int = Form(...),
    deskripsi: str = Form(...),
    tanggal_laporan: date = Form(...),
    lokasi: Optional[str] = Form(None),
    foto: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    filename = save_photo(foto)
    try:
        laporan = laporan_service.create_laporan(
            db,
            sarpras_id=sarpras_id,
            deskripsi=deskripsi,
            tanggal_laporan=tanggal_laporan,
            lokasi=lokasi,
            foto=filename,
            actor=user,
            ip=get_ip(request),
        )
    except Exception:
        delete_photo(filename)
        raise

    return ApiResponse(data=CreatedId(id=laporan.id), message="Laporan created successfully")


@router.put("/{laporan_id}", response_model=ApiResponse[LaporanOut])
def update_laporan(
    laporan_id: int,
    request: Request,
    deskripsi: Optional[str] = Form(None),
    lokasi: Optional[str] = Form(None),
    tanggal_laporan: Optional[date] = Form(None),
    foto: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    filename = save_photo(foto)
    try:
        laporan_service.update_laporan(
            db,
            laporan_id,
            actor=user,
            deskripsi=deskripsi,
            lokasi=lokasi,
            tanggal_laporan=tanggal_laporan,
            foto=filename,
            ip=get_ip(request),
        )
    except Exception:
        delete_photo(filename)
        raise

    return ApiResponse(
        data=laporan_service.get_laporan_detail(db, laporan_id),
        message="Laporan updated successfully",
    )


@router.delete("/{laporan_id}", response_model=ApiResponse[None])
def delete_laporan(
    laporan_id: int,
    request: Request,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    laporan_service.delete_laporan(db, laporan_id, actor=user, ip=get_ip(request))
    return ApiResponse(message="Laporan deleted successfully")
