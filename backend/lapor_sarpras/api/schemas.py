# backend/lapor_sarpras/api/schemas.py

from datetime import date, datetime
from typing import Generic, List, Optional, TypeVar

from pydantic import AliasChoices, BaseModel, EmailStr, Field, field_validator

from lapor_sarpras.models.enums import DEFAULT_KONDISI, LaporanStatus, Role

T = TypeVar("T")


# ---------- ENVELOPE ----------

class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None


class CreatedId(BaseModel):
    id: int


# ---------- AUTH / USERS ----------

class RegisterIn(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    password: str = Field(min_length=6)
    nama: str = Field(min_length=1)
    email: EmailStr
    role: Role = Role.USER

    @field_validator("username", "nama")
    @classmethod
    def _strip(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class LoginIn(BaseModel):
    username: str
    password: str
    role: Optional[Role] = Field(
        default=None,
        validation_alias=AliasChoices("role", "selectedRole"),
    )


class UserOut(BaseModel):
    id: int
    username: str
    nama: str
    email: str
    role: Role
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class LoginOut(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserOut


class TokenOut(BaseModel):
    # OAuth2 form flow (Swagger "Authorize") expects these two keys at top level
    access_token: str
    token_type: str = "bearer"


# ---------- SARPRAS ----------

class SarprasOut(BaseModel):
    id: int
    kode_sarpras: str
    nama_sarpras: str
    kategori: Optional[str] = None
    lokasi: Optional[str] = None
    kondisi: str
    qr_code: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SarprasCreate(BaseModel):
    kode_sarpras: str = Field(min_length=1)
    nama_sarpras: str = Field(min_length=1)
    kategori: Optional[str] = None
    lokasi: Optional[str] = None
    kondisi: str = DEFAULT_KONDISI

    @field_validator("nama_sarpras")
    @classmethod
    def _strip_nama(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("kondisi", mode="before")
    @classmethod
    def _default_kondisi(cls, v):
        # empty string from a form means "not given"
        return v or DEFAULT_KONDISI


class SarprasUpdate(BaseModel):
    # kode_sarpras is immutable once printed on the sticker
    nama_sarpras: Optional[str] = Field(default=None, min_length=1)
    kategori: Optional[str] = None
    lokasi: Optional[str] = None
    kondisi: Optional[str] = Field(default=None, min_length=1)

    @field_validator("nama_sarpras", "kondisi")
    @classmethod
    def _not_null(cls, v: Optional[str]) -> str:
        # omitted means untouched, explicit null would blank a NOT NULL column
        if v is None:
            raise ValueError("must not be null")
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    class Config:
        extra = "forbid"


# ---------- LAPORAN ----------

class LaporanOut(BaseModel):
    id: int
    user_id: int
    sarpras_id: int
    deskripsi: str
    lokasi: Optional[str] = None
    tanggal_laporan: date
    foto: Optional[str] = None
    status: LaporanStatus
    catatan_admin: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # joined
    nama_sarpras: Optional[str] = None
    kode_sarpras: Optional[str] = None
    nama_pelapor: Optional[str] = None


class LaporanDetail(LaporanOut):
    kategori: Optional[str] = None
    email: Optional[str] = None


class StatusUpdate(BaseModel):
    status: LaporanStatus
    catatan_admin: Optional[str] = None
    # allow moving a report back (e.g. selesai -> diproses on reopen)
    override: bool = False


# ---------- ADMIN ----------

class DashboardOut(BaseModel):
    total_laporan: int
    status_count: dict[str, int]
    total_sarpras: int
    kondisi_count: dict[str, int]
    recent_laporan: List[LaporanOut]


class AuditLogOut(BaseModel):
    id: int
    action: str
    entity: str
    entity_id: int
    summary: Optional[str] = None
    actor: str
    ip: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
