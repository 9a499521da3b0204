"""Unit tests for ContentStore lookups and fallbacks"""

from __future__ import annotations

import pytest

from forsaj.content.models import ImageRef, Page, TextSection
from forsaj.content.reader import ContentStore, StoreState
from forsaj.utils.errors import IOFailureError


@pytest.fixture
def store() -> ContentStore:
    store = ContentStore()
    store.load(
        [
            Page(
                id="home",
                title="Ana Səhifə",
                sections=[
                    TextSection(id="hero-title", value="Offroad Çempionatı"),
                    TextSection(id="txt-abc", value="Qeydiyyat"),
                ],
                images=[ImageRef(id="hero-bg", path="/images/bg.jpg", alt="Fon")],
            ),
            Page(
                id="draft",
                title="Draft",
                sections=[TextSection(id="t", value="Gizli")],
                isActive=False,
            ),
        ]
    )
    return store


def test_new_store_is_loading_and_answers_with_fallback():
    store = ContentStore()

    assert store.state == StoreState.LOADING
    assert store.get("home") is None
    assert store.resolve_text("home", "hero-title", "Default") == "Default"


def test_resolve_text_by_key_and_index(store):
    assert store.is_ready()
    assert store.resolve_text("home", "hero-title") == "Offroad Çempionatı"
    assert store.resolve_text("home", 1) == "Qeydiyyat"


def test_page_scope_is_case_insensitive(store):
    assert store.resolve_text("HOME", "hero-title") == "Offroad Çempionatı"


def test_fallback_for_missing_page_item_or_index(store):
    assert store.resolve_text("nonexistent", "x", "Default") == "Default"
    assert store.resolve_text("home", "missing", "Default") == "Default"
    assert store.resolve_text("home", 7, "Default") == "Default"
    assert store.resolve_text("home", -1, "Default") == "Default"


def test_bool_is_not_treated_as_index(store):
    assert store.resolve_text("home", True, "Default") == "Default"


def test_inactive_page_is_hidden_from_lookups(store):
    assert store.resolve_text("draft", "t", "Default") == "Default"
    assert store.get("draft") is not None


def test_resolve_image(store):
    assert store.resolve_image("home", "hero-bg") == {"path": "/images/bg.jpg", "alt": "Fon"}
    assert store.resolve_image("home", 0)["path"] == "/images/bg.jpg"
    assert store.resolve_image("home", "nope", "/fallback.png") == {
        "path": "/fallback.png",
        "alt": "",
    }


def test_failed_reload_leaves_store_loading(store):
    def broken_fetch():
        raise IOFailureError("disk gone")

    with pytest.raises(IOFailureError):
        store.load_from(broken_fetch)

    assert store.state == StoreState.LOADING
    assert store.resolve_text("home", "hero-title", "Default") == "Default"
