"""
Lapor Sarpras - test configuration and fixtures
"""
import os
from datetime import date
from typing import Generator

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Set testing environment before the app reads its settings
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret-key-for-testing"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["SEED_DEMO_USERS"] = "false"

from lapor_sarpras.main import app
from lapor_sarpras.api.deps import get_db
from lapor_sarpras.core.config import settings
from lapor_sarpras.core.database import Base
from lapor_sarpras.core.security import create_access_token, hash_password
from lapor_sarpras.models.enums import Role
from lapor_sarpras.models.user import User

fake = Faker()

# one in-memory database shared by every session of a test
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(bind=test_engine, autocommit=False, autoflush=False)


@pytest.fixture(autouse=True)
def _tables() -> Generator[None, None, None]:
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(autouse=True)
def upload_dir(tmp_path, monkeypatch):
    path = tmp_path / "uploads"
    monkeypatch.setattr(settings, "upload_dir", str(path))
    return path


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    def override_get_db():
        db = TestSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(db: Session, *, role: Role = Role.USER, username: str = None, password: str = "password123") -> User:
    user = User(
        username=username or fake.unique.user_name(),
        email=fake.unique.email(),
        nama=fake.name(),
        role=role.value,
        password_hash=hash_password(password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def headers_for(user: User) -> dict:
    token = create_access_token({"sub": str(user.id), "username": user.username, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_user(db_session: Session) -> User:
    return make_user(db_session, role=Role.ADMIN)


@pytest.fixture
def regular_user(db_session: Session) -> User:
    return make_user(db_session)


@pytest.fixture
def other_user(db_session: Session) -> User:
    return make_user(db_session)


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    return headers_for(admin_user)


@pytest.fixture
def user_headers(regular_user: User) -> dict:
    return headers_for(regular_user)


@pytest.fixture
def other_headers(other_user: User) -> dict:
    return headers_for(other_user)


@pytest.fixture
def create_sarpras(client: TestClient, admin_headers: dict):
    """Create an asset through the API as admin, return its id."""

    def _create(kode: str = "AC-101", **fields) -> int:
        payload = {
            "kode_sarpras": kode,
            "nama_sarpras": fields.pop("nama_sarpras", f"Sarpras {kode}"),
            "kategori": fields.pop("kategori", "Elektronik"),
            "lokasi": fields.pop("lokasi", "Gedung A Lt. 1"),
            **fields,
        }
        response = client.post("/api/sarpras", json=payload, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]["id"]

    return _create


@pytest.fixture
def create_laporan(client: TestClient):
    """File a report through the API, return its id."""

    def _create(headers: dict, sarpras_id: int, **fields) -> int:
        data = {
            "sarpras_id": str(sarpras_id),
            "deskripsi": fields.pop("deskripsi", "AC tidak dingin"),
            "tanggal_laporan": fields.pop("tanggal_laporan", date(2026, 10, 1).isoformat()),
            **fields,
        }
        response = client.post("/api/laporan", data=data, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]["id"]

    return _create
