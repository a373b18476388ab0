from sqlalchemy import func
from sqlalchemy.orm import Session

from lapor_sarpras.models.enums import LaporanStatus
from lapor_sarpras.models.laporan import Laporan
from lapor_sarpras.models.sarpras import Sarpras
from lapor_sarpras.services.laporan import list_laporan

RECENT_LIMIT = 10


def dashboard_summary(db: Session) -> dict:
    total_laporan = db.query(func.count(Laporan.id)).scalar() or 0

    # zero-filled so the dashboard cards always have all three
    status_count = {s.value: 0 for s in LaporanStatus}
    for status, n in db.query(Laporan.status, func.count(Laporan.id)).group_by(Laporan.status):
        status_count[status] = n

    active = db.query(Sarpras).filter(Sarpras.is_active == True)
    total_sarpras = active.count()

    kondisi_count = {
        kondisi: n
        for kondisi, n in (
            db.query(Sarpras.kondisi, func.count(Sarpras.id))
            .filter(Sarpras.is_active == True)
            .group_by(Sarpras.kondisi)
        )
    }

    return {
        "total_laporan": total_laporan,
        "status_count": status_count,
        "total_sarpras": total_sarpras,
        "kondisi_count": kondisi_count,
        "recent_laporan": list_laporan(db, limit=RECENT_LIMIT),
    }
