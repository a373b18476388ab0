from datetime import timedelta

from lapor_sarpras.core.security import create_access_token
from lapor_sarpras.services.users import INVALID_CREDENTIALS

from conftest import headers_for


def register(client, **overrides):
    payload = {
        "username": "budi",
        "password": "secret1",
        "nama": "Budi Santoso",
        "email": "budi@example.com",
        **overrides,
    }
    return client.post("/api/auth/register", json=payload)


def test_register_defaults_role_and_login_succeeds(client):
    response = register(client)
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert isinstance(body["data"]["id"], int)

    response = client.post("/api/auth/login", json={"username": "budi", "password": "secret1"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["token"]
    assert data["token_type"] == "bearer"
    assert data["user"]["role"] == "user"
    assert data["user"]["username"] == "budi"
    assert "password_hash" not in data["user"]
    assert "password" not in data["user"]


def test_register_admin_role(client):
    response = register(client, role="admin")
    assert response.status_code == 201

    response = client.post("/api/auth/login", json={"username": "budi", "password": "secret1"})
    assert response.json()["data"]["user"]["role"] == "admin"


def test_register_duplicate_username_conflicts(client):
    register(client)
    response = register(client, email="other@example.com")

    assert response.status_code == 409
    assert response.json() == {"success": False, "message": "Username atau email sudah digunakan"}


def test_register_duplicate_email_conflicts(client):
    register(client)
    response = register(client, username="budi2")

    assert response.status_code == 409


def test_register_rejects_unknown_role(client):
    response = register(client, role="superuser")

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_register_missing_field_is_validation_error(client):
    response = client.post("/api/auth/register", json={"username": "budi", "password": "secret1"})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_wrong_password_and_unknown_user_look_identical(client):
    register(client)

    wrong_password = client.post("/api/auth/login", json={"username": "budi", "password": "nope!!"})
    unknown_user = client.post("/api/auth/login", json={"username": "siapa", "password": "secret1"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json()
    assert wrong_password.json()["message"] == INVALID_CREDENTIALS


def test_login_role_filter(client):
    register(client)

    as_admin = client.post(
        "/api/auth/login",
        json={"username": "budi", "password": "secret1", "selectedRole": "admin"},
    )
    as_user = client.post(
        "/api/auth/login",
        json={"username": "budi", "password": "secret1", "role": "user"},
    )

    assert as_admin.status_code == 401
    assert as_admin.json()["message"] == INVALID_CREDENTIALS
    assert as_user.status_code == 200


def test_oauth2_token_endpoint(client):
    register(client)

    response = client.post("/api/auth/token", data={"username": "budi", "password": "secret1"})

    assert response.status_code == 200
    assert response.json()["token_type"] == "bearer"
    assert response.json()["access_token"]


def test_me_requires_token(client):
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.json()["success"] is False
    assert response.headers["www-authenticate"] == "Bearer"


def test_me_rejects_garbage_token(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401


def test_me_rejects_expired_token(client, regular_user):
    token = create_access_token({"sub": str(regular_user.id)}, expires_delta=timedelta(seconds=-5))

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_me_rejects_token_of_deleted_user(client, db_session, regular_user):
    headers = headers_for(regular_user)
    db_session.delete(regular_user)
    db_session.commit()

    response = client.get("/api/auth/me", headers=headers)

    assert response.status_code == 401


def test_me_returns_identity(client, regular_user, user_headers):
    response = client.get("/api/auth/me", headers=user_headers)

    assert response.status_code == 200
    assert response.json()["data"]["id"] == regular_user.id
    assert response.json()["data"]["email"] == regular_user.email


def test_logout_revokes_token(client, user_headers):
    assert client.get("/api/auth/me", headers=user_headers).status_code == 200

    response = client.post("/api/auth/logout", headers=user_headers)
    assert response.status_code == 200

    response = client.get("/api/auth/me", headers=user_headers)
    assert response.status_code == 401
    assert response.json()["message"] == "Token has been revoked"
