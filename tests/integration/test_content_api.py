"""Integration tests for the content, sitemap and image endpoints"""

from __future__ import annotations

import json


def test_get_content_before_extraction_is_empty(client):
    response = client.get("/api/get-content")

    assert response.status_code == 200
    assert response.json() == []


def test_extract_content_returns_pages_stats_and_sitemap(client, settings):
    response = client.post("/api/extract-content")

    assert response.status_code == 200
    body = response.json()
    assert [p["id"] for p in body["pages"]] == ["footer", "hero"]
    assert body["stats"] == {"total": 2, "sections": 7, "images": 2}
    components = next(n for n in body["sitemap"] if n["title"] == "Komponentlər")
    assert [c["path"] for c in components["children"]] == ["/?page=footer", "/?page=hero"]
    assert json.loads(settings.sitemap_path.read_text(encoding="utf-8")) == body["sitemap"]


def test_site_content_alias_matches_get_content(client):
    client.post("/api/extract-content")

    assert client.get("/api/site-content").json() == client.get("/api/get-content").json()


def test_save_content_overwrites_and_refreshes_page_lookup(client):
    client.post("/api/extract-content")
    pages = client.get("/api/get-content").json()
    hero = next(p for p in pages if p["id"] == "hero")
    hero["sections"][0]["value"] = "Yeni başlıq"

    response = client.post("/api/save-content", json=[hero])

    assert response.status_code == 200
    assert response.json() == {"success": True, "count": 1}
    assert [p["id"] for p in client.get("/api/get-content").json()] == ["hero"]
    page = client.get("/api/pages/HERO").json()
    assert page["sections"][0]["value"] == "Yeni başlıq"


def test_save_content_rejects_malformed_pages(client):
    response = client.post("/api/save-content", json=[{"title": "no id"}])

    assert response.status_code == 422
    assert "id" in response.json()["invalid_fields"]


def test_get_unknown_page_is_not_found(client):
    response = client.get("/api/pages/nonexistent")

    assert response.status_code == 404
    assert response.json()["error"] == "not_found"
    assert response.json()["message"] == "Səhifə tapılmadı"


def test_get_page_with_invalid_id(client):
    response = client.get("/api/pages/bad.id")

    assert response.status_code == 400
    assert response.json()["error"] == "validation_failure"


def test_sitemap_defaults_before_extraction(client):
    assert client.get("/api/sitemap").json() == [
        {"title": "Sayt Redaktoru", "icon": "Globe", "path": "/"}
    ]


def test_corrupt_manifest_is_io_failure(client, settings):
    settings.content_path.write_text("{broken", encoding="utf-8")

    response = client.get("/api/get-content")

    assert response.status_code == 500
    assert response.json()["error"] == "io_failure"


def test_all_images_lists_public_dir(client, settings):
    (settings.data_dir / "images").mkdir(parents=True, exist_ok=True)
    (settings.data_dir / "images" / "car.jpg").write_bytes(b"")

    response = client.get("/api/all-images")

    assert response.json() == {"local": ["/images/car.jpg"]}


def test_extract_requires_auth_when_key_configured(secured_client):
    assert secured_client.post("/api/extract-content").status_code == 401
    assert secured_client.get("/api/get-content").status_code == 200

    response = secured_client.post(
        "/api/extract-content", headers={"Authorization": "Bearer test-admin-key"}
    )
    assert response.status_code == 200
