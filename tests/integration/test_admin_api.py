"""Integration tests for collections, uploads, accounts and status endpoints"""

from __future__ import annotations

import pytest

from forsaj.records.repository import COLLECTIONS


@pytest.mark.parametrize("name", sorted(COLLECTIONS))
def test_collections_read_empty_when_missing(client, name):
    response = client.get(f"/api/{name}")

    assert response.status_code == 200
    assert response.json() == []


def test_drivers_save_returns_recomputed_ranks(client):
    payload = [
        {
            "id": 1,
            "name": "Unlimited",
            "drivers": [
                {"id": 1, "name": "A", "points": 10},
                {"id": 2, "name": "B", "points": 50},
                {"id": 3, "name": "C", "points": 30},
            ],
        }
    ]

    response = client.post("/api/drivers", json=payload)

    assert response.status_code == 200
    drivers = response.json()["items"][0]["drivers"]
    assert [(d["name"], d["rank"]) for d in drivers] == [("B", 1), ("C", 2), ("A", 3)]
    assert client.get("/api/drivers").json() == response.json()["items"]


def test_drivers_save_without_ids_reorders_by_points(client):
    payload = [{"drivers": [{"name": "A", "points": 20}, {"name": "B", "points": 40}]}]

    response = client.post("/api/drivers", json=payload)

    assert response.status_code == 200
    drivers = response.json()["items"][0]["drivers"]
    assert [(d["name"], d["rank"]) for d in drivers] == [("B", 1), ("A", 2)]
    assert [d["points"] for d in drivers] == [40, 20]


def test_collection_save_assigns_missing_ids(client):
    response = client.post("/api/gallery-photos", json=[{"title": "Start", "url": "/g/1.jpg"}])

    assert response.json()["items"][0]["id"] == 1
    assert client.get("/api/gallery-photos").json()[0]["id"] == 1


def test_collection_save_is_full_overwrite(client):
    client.post("/api/events", json=[{"id": 1, "title": "A"}, {"id": 2, "title": "B"}])

    client.post("/api/events", json=[{"id": 3, "title": "C", "pdfUrl": "/r.pdf"}])

    events = client.get("/api/events").json()
    assert [e["id"] for e in events] == [3]
    assert events[0]["pdfUrl"] == "/r.pdf"


def test_collection_save_rejects_invalid_records(client):
    response = client.post("/api/news", json=[{"id": 1, "date": {"day": 1}}])

    assert response.status_code == 400
    assert response.json()["error"] == "validation_failure"


def test_upload_image_stores_file_and_serves_it(client, settings):
    response = client.post(
        "/api/upload-image", files={"image": ("car.PNG", b"\x89PNGdata", "image/png")}
    )

    assert response.status_code == 200
    url = response.json()["url"]
    assert url.startswith("/uploads/") and url.endswith(".png")
    assert (settings.upload_dir / url.rsplit("/", 1)[1]).read_bytes() == b"\x89PNGdata"
    assert client.get(url).content == b"\x89PNGdata"


def test_upload_rejects_non_images(client):
    response = client.post(
        "/api/upload-image", files={"image": ("notes.txt", b"hello", "text/plain")}
    )

    assert response.status_code == 400
    assert response.json()["error"] == "validation_failure"


def test_upload_without_file(client):
    response = client.post("/api/upload-image", files={"other": ("a.png", b"x", "image/png")})

    assert response.status_code == 400


def test_first_run_setup_and_login_flow(secured_client):
    assert secured_client.get("/api/check-setup").json() == {"needsSetup": True}

    setup = secured_client.post(
        "/api/setup", json={"username": "Boss", "name": "Boss", "password": "secret1"}
    )
    assert setup.status_code == 200
    assert setup.json()["user"]["role"] == "master"
    assert secured_client.get("/api/check-setup").json() == {"needsSetup": False}

    again = secured_client.post(
        "/api/setup", json={"username": "other", "name": "O", "password": "secret1"}
    )
    assert again.status_code == 400

    bad = secured_client.post("/api/login", json={"username": "boss", "password": "wrong"})
    assert bad.status_code == 401

    login = secured_client.post("/api/login", json={"username": "boss", "password": "secret1"})
    assert login.status_code == 200
    token = login.json()["token"]

    assert secured_client.get("/api/users").status_code == 401
    users = secured_client.get("/api/users", headers={"Authorization": f"Bearer {token}"})
    assert [u["username"] for u in users.json()] == ["boss"]
    assert "password_hash" not in users.json()[0]


def test_user_management(client):
    client.post("/api/setup", json={"username": "boss", "name": "Boss", "password": "secret1"})

    created = client.post(
        "/api/users",
        json={"username": "editor", "name": "Ed", "role": "secondary", "password": "secret2"},
    )
    assert created.status_code == 200
    editor_id = created.json()["user"]["id"]

    assert client.delete(f"/api/users/{editor_id}").json() == {"success": True}
    assert [u["username"] for u in client.get("/api/users").json()] == ["boss"]
    assert client.delete("/api/users/12345").status_code == 404


def test_setup_validates_input(client):
    response = client.post("/api/setup", json={"username": "a", "name": "A", "password": "1"})

    assert response.status_code == 422


def test_health_and_banner(client):
    health = client.get("/health").json()
    assert health["status"] == "healthy"
    assert health["content"]["state"] == "ready"

    assert client.get("/").json()["status"] == "running"


def test_frontend_status_and_action(client):
    status = client.get("/api/frontend/status").json()

    assert status["status"] == "running"
    assert 0 <= status["stats"]["cpu"] <= 100
    assert status["stats"]["ram"]["total"] > 0
    assert status["stats"]["uptime"].endswith("m")

    action = client.post("/api/frontend/action", json={"action": "restart"})
    assert action.json() == {"status": "running"}


def test_security_headers_present(client):
    response = client.get("/health")

    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
