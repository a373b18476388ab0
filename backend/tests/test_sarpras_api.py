import pytest

from lapor_sarpras.models.sarpras import Sarpras
from lapor_sarpras.services.qr import generate_qr_data_url


def test_scan_resolves_exact_code(client, create_sarpras, user_headers):
    sarpras_id = create_sarpras("AC-101", nama_sarpras="AC Ruang 101")

    response = client.get("/api/sarpras/qr/AC-101", headers=user_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == sarpras_id
    assert data["kode_sarpras"] == "AC-101"
    assert data["nama_sarpras"] == "AC Ruang 101"

    response = client.get("/api/sarpras/qr/AC-999", headers=user_headers)
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Sarpras not found"}


def test_scan_is_case_sensitive(client, create_sarpras, user_headers):
    create_sarpras("AC-101")

    response = client.get("/api/sarpras/qr/ac-101", headers=user_headers)

    assert response.status_code == 404


def test_scan_requires_login(client, create_sarpras):
    create_sarpras("AC-101")

    assert client.get("/api/sarpras/qr/AC-101").status_code == 401


def test_create_generates_qr_and_default_kondisi(client, create_sarpras, user_headers):
    sarpras_id = create_sarpras("AC-101")

    data = client.get(f"/api/sarpras/{sarpras_id}", headers=user_headers).json()["data"]

    assert data["kondisi"] == "baik"
    assert data["qr_code"] == generate_qr_data_url("AC-101")


def test_duplicate_code_conflicts_without_writing(client, create_sarpras, admin_headers, db_session):
    create_sarpras("AC-101")

    response = client.post(
        "/api/sarpras",
        json={"kode_sarpras": "AC-101", "nama_sarpras": "Lain"},
        headers=admin_headers,
    )

    assert response.status_code == 409
    assert response.json()["success"] is False
    assert db_session.query(Sarpras).count() == 1


def test_create_rejects_blank_name(client, admin_headers, db_session):
    response = client.post(
        "/api/sarpras",
        json={"kode_sarpras": "AC-101", "nama_sarpras": "   "},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert db_session.query(Sarpras).count() == 0


def test_create_strips_name(client, admin_headers, user_headers):
    response = client.post(
        "/api/sarpras",
        json={"kode_sarpras": "AC-101", "nama_sarpras": "  AC Ruang 101 "},
        headers=admin_headers,
    )

    sarpras_id = response.json()["data"]["id"]
    data = client.get(f"/api/sarpras/{sarpras_id}", headers=user_headers).json()["data"]
    assert data["nama_sarpras"] == "AC Ruang 101"


def test_create_requires_admin(client, user_headers):
    response = client.post(
        "/api/sarpras",
        json={"kode_sarpras": "AC-101", "nama_sarpras": "AC"},
        headers=user_headers,
    )

    assert response.status_code == 403
    assert response.json() == {"success": False, "message": "Admin role required"}


def test_list_newest_first(client, create_sarpras, user_headers):
    first = create_sarpras("AC-101")
    second = create_sarpras("AC-102")

    data = client.get("/api/sarpras", headers=user_headers).json()["data"]

    assert [s["id"] for s in data] == [second, first]


def test_get_unknown_id(client, user_headers):
    response = client.get("/api/sarpras/9999", headers=user_headers)

    assert response.status_code == 404


def test_update_fields(client, create_sarpras, admin_headers):
    sarpras_id = create_sarpras("AC-101")

    response = client.put(
        f"/api/sarpras/{sarpras_id}",
        json={"lokasi": "Gedung B", "kondisi": "rusak ringan"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["lokasi"] == "Gedung B"
    assert data["kondisi"] == "rusak ringan"
    # untouched
    assert data["nama_sarpras"] == "Sarpras AC-101"
    assert data["kode_sarpras"] == "AC-101"


def test_update_cannot_change_code(client, create_sarpras, admin_headers, user_headers):
    sarpras_id = create_sarpras("AC-101")

    response = client.put(
        f"/api/sarpras/{sarpras_id}",
        json={"kode_sarpras": "AC-999"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert client.get("/api/sarpras/qr/AC-101", headers=user_headers).status_code == 200


@pytest.mark.parametrize("field", ["nama_sarpras", "kondisi"])
def test_update_rejects_null_required_field(client, create_sarpras, admin_headers, user_headers, field):
    sarpras_id = create_sarpras("AC-101")

    response = client.put(f"/api/sarpras/{sarpras_id}", json={field: None}, headers=admin_headers)

    assert response.status_code == 400
    data = client.get(f"/api/sarpras/{sarpras_id}", headers=user_headers).json()["data"]
    assert data["nama_sarpras"] == "Sarpras AC-101"
    assert data["kondisi"] == "baik"


def test_update_requires_admin(client, create_sarpras, user_headers):
    sarpras_id = create_sarpras("AC-101")

    response = client.put(f"/api/sarpras/{sarpras_id}", json={"lokasi": "X"}, headers=user_headers)

    assert response.status_code == 403


def test_delete_blocked_by_open_reports(client, create_sarpras, create_laporan, admin_headers, user_headers):
    sarpras_id = create_sarpras("AC-101")
    create_laporan(user_headers, sarpras_id)

    response = client.delete(f"/api/sarpras/{sarpras_id}", headers=admin_headers)

    assert response.status_code == 409
    assert client.get(f"/api/sarpras/{sarpras_id}", headers=user_headers).status_code == 200


def test_delete_archives_and_keeps_report_history(
    client, create_sarpras, create_laporan, admin_headers, user_headers
):
    sarpras_id = create_sarpras("AC-101", nama_sarpras="AC Ruang 101")
    laporan_id = create_laporan(user_headers, sarpras_id)
    client.patch(
        f"/api/admin/laporan/{laporan_id}/status",
        json={"status": "selesai"},
        headers=admin_headers,
    )

    response = client.delete(f"/api/sarpras/{sarpras_id}", headers=admin_headers)
    assert response.status_code == 200

    assert client.get(f"/api/sarpras/{sarpras_id}", headers=user_headers).status_code == 404
    assert client.get("/api/sarpras/qr/AC-101", headers=user_headers).status_code == 404
    assert client.get("/api/sarpras", headers=user_headers).json()["data"] == []

    detail = client.get(f"/api/laporan/{laporan_id}", headers=user_headers).json()["data"]
    assert detail["nama_sarpras"] == "AC Ruang 101"

    # the archived asset still owns its code
    response = client.post(
        "/api/sarpras",
        json={"kode_sarpras": "AC-101", "nama_sarpras": "AC baru"},
        headers=admin_headers,
    )
    assert response.status_code == 409


def test_qr_png(client, create_sarpras, user_headers):
    sarpras_id = create_sarpras("AC-101")

    response = client.get(f"/api/sarpras/{sarpras_id}/qr.png", headers=user_headers)

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert response.content.startswith(b"\x89PNG\r\n\x1a\n")
