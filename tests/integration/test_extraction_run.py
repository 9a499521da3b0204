"""Integration tests for a full extraction run over a sample front-end tree

Tests cover:
- Pages, ordering and stats from real component sources
- Empty components omitted, entry file scanned
- Identical ids across repeated runs
- Manifest round trip through load_pages/save_pages
"""

from __future__ import annotations

import json

import pytest

from forsaj.content.service import ContentService
from forsaj.utils.errors import ValidationFailureError


@pytest.fixture
def service(settings) -> ContentService:
    return ContentService(
        components_dir=settings.components_dir,
        content_path=settings.content_path,
        sitemap_path=settings.sitemap_path,
        entry_file=settings.entry_path,
    )


def test_extract_builds_pages_from_components(service, settings):
    result = service.extract()

    assert [p.id for p in result.pages] == ["footer", "hero"]
    assert (result.stats.total, result.stats.sections, result.stats.images) == (2, 7, 2)
    assert settings.content_path.exists()
    assert settings.sitemap_path.exists()


def test_hero_page_contents(service):
    hero = next(p for p in service.extract().pages if p.id == "hero")

    assert hero.title == "Giriş Bloku"
    assert [s.value for s in hero.sections] == [
        "Forsaj yarışı",
        "Offroad Çempionatı",
        "Azərbaycanın ən sürətli yarışları",
        "Qeydiyyat",
    ]
    assert hero.sections[1].id == "hero-title"
    assert [i.path for i in hero.images] == ["/images/hero.jpg", "/images/logo.png"]
    assert hero.images[1].id == "hero-logo"


def test_footer_skips_comments_and_keeps_labels(service):
    footer = next(p for p in service.extract().pages if p.id == "footer")

    values = [s.value for s in footer.sections]
    assert values == ["Haqqımızda", "Bütün hüquqlar qorunur", "E-poçt ünvanınız"]
    assert not any("copyright" in v for v in values)


def test_repeated_runs_produce_identical_ids(service):
    first = service.extract().to_json()
    second = service.extract().to_json()

    assert first["pages"] == second["pages"]


def test_extraction_replaces_operator_edits(service):
    service.extract()
    pages = service.load_pages()
    pages[0].sections[0].value = "Edited"
    service.save_pages(pages)

    assert service.load_pages()[0].sections[0].value == "Edited"

    service.extract()
    assert service.load_pages()[0].sections[0].value != "Edited"


def test_load_pages_missing_manifest_is_empty(service):
    assert service.load_pages() == []


def test_load_pages_rejects_non_array(service, settings):
    settings.content_path.parent.mkdir(parents=True, exist_ok=True)
    settings.content_path.write_text(json.dumps({"pages": []}))

    with pytest.raises(ValidationFailureError):
        service.load_pages()


def test_missing_components_dir_yields_empty_manifest(tmp_path):
    service = ContentService(
        components_dir=tmp_path / "nowhere",
        content_path=tmp_path / "site-content.json",
        sitemap_path=tmp_path / "sitemap.json",
    )

    result = service.extract()

    assert result.pages == []
    assert json.loads((tmp_path / "site-content.json").read_text()) == []
