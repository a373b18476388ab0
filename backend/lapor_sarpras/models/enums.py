from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"


class LaporanStatus(str, Enum):
    MENUNGGU = "menunggu"
    DIPROSES = "diproses"
    SELESAI = "selesai"


# informational only, kondisi stays an open string
DEFAULT_KONDISI = "baik"
