import logging

from sqlalchemy.orm import Session

from lapor_sarpras.core.security import hash_password
from lapor_sarpras.models.enums import Role
from lapor_sarpras.models.sarpras import Sarpras
from lapor_sarpras.models.user import User
from lapor_sarpras.services.qr import generate_qr_data_url

logger = logging.getLogger(__name__)


def seed_users_if_empty(db: Session):
    existing = db.query(User).count()
    if existing > 0:
        return

    # Change these creds anytime (demo defaults)
    admin = User(
        username="admin",
        email="admin@sekolah.local",
        nama="Administrator",
        role=Role.ADMIN.value,
        password_hash=hash_password("admin123"),
    )
    user = User(
        username="siswa",
        email="siswa@sekolah.local",
        nama="Siswa Demo",
        role=Role.USER.value,
        password_hash=hash_password("siswa123"),
    )

    db.add_all([admin, user])
    db.commit()
    logger.info("Seeded demo users: admin / admin123, siswa / siswa123")


def seed_sarpras_if_empty(db: Session):
    if db.query(Sarpras).count() > 0:
        return

    items = [
        ("AC-101", "AC Ruang 101", "Elektronik", "Gedung A Lt. 1", "baik"),
        ("PRJ-201", "Proyektor Ruang 201", "Elektronik", "Gedung A Lt. 2", "rusak ringan"),
        ("MJ-LAB1", "Meja Lab Komputer", "Mebel", "Lab Komputer 1", "baik"),
    ]
    db.add_all(
        [
            Sarpras(
                kode_sarpras=kode,
                nama_sarpras=nama,
                kategori=kategori,
                lokasi=lokasi,
                kondisi=kondisi,
                qr_code=generate_qr_data_url(kode),
            )
            for kode, nama, kategori, lokasi, kondisi in items
        ]
    )
    db.commit()
    logger.info("Seeded %d demo sarpras", len(items))


if __name__ == "__main__":
    from lapor_sarpras import models  # noqa: F401
    from lapor_sarpras.core.database import Base, SessionLocal, engine
    from lapor_sarpras.core.logging_config import setup_logging

    setup_logging()

    # make sure tables exist (DEV ONLY)
    Base.metadata.create_all(bind=engine)

    session = SessionLocal()
    try:
        seed_users_if_empty(session)
        seed_sarpras_if_empty(session)
    finally:
        session.close()
