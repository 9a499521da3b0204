"""
Content reader: runtime lookup of page text and images with fallbacks.

``ContentStore`` holds one loaded manifest. It starts in ``LOADING`` and moves
to ``READY`` when a load completes; lookups made before that, or for a page or
item that does not exist, return the caller's fallback instead of failing.
Nothing is queued while loading.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from enum import Enum

from forsaj.content.models import ImageRef, Page, TextSection
from forsaj.observability.logging import get_logger

logger = get_logger(__name__)


class StoreState(str, Enum):
    LOADING = "loading"
    READY = "ready"


KeyOrIndex = str | int


class ContentStore:
    """In-memory view of the content manifest, keyed by lowercase page id."""

    def __init__(self) -> None:
        self._pages: dict[str, Page] = {}
        self._state = StoreState.LOADING

    @property
    def state(self) -> StoreState:
        return self._state

    def is_ready(self) -> bool:
        return self._state == StoreState.READY

    def load(self, pages: Iterable[Page]) -> None:
        """Replace the loaded pages and mark the store ready."""
        self._pages = {page.id.lower(): page for page in pages}
        self._state = StoreState.READY
        logger.debug("Content store loaded %d pages", len(self._pages))

    def load_from(self, fetch: Callable[[], Iterable[Page]]) -> None:
        """
        Load pages from a fetch callable.

        The store goes back to LOADING for the duration of the fetch. If the
        fetch raises, the store stays LOADING and the error propagates.
        """
        self._state = StoreState.LOADING
        self.load(fetch())

    def pages(self) -> list[Page]:
        return list(self._pages.values())

    def get(self, page_id: str) -> Page | None:
        if not self.is_ready():
            return None
        return self._pages.get(page_id.lower())

    def _live_page(self, page_scope: str) -> Page | None:
        page = self.get(page_scope)
        if page is None or not page.is_active:
            return None
        return page

    def find_section(self, page_scope: str, key_or_index: KeyOrIndex) -> TextSection | None:
        page = self._live_page(page_scope)
        if page is None:
            return None
        return _pick(page.sections, key_or_index)

    def find_image(self, page_scope: str, key_or_index: KeyOrIndex) -> ImageRef | None:
        page = self._live_page(page_scope)
        if page is None:
            return None
        return _pick(page.images, key_or_index)

    def resolve_text(self, page_scope: str, key_or_index: KeyOrIndex, fallback: str = "") -> str:
        section = self.find_section(page_scope, key_or_index)
        return section.value if section is not None else fallback

    def resolve_image(
        self, page_scope: str, key_or_index: KeyOrIndex, fallback: str = ""
    ) -> dict[str, str]:
        image = self.find_image(page_scope, key_or_index)
        if image is None:
            return {"path": fallback, "alt": ""}
        return {"path": image.path, "alt": image.alt}


def _pick(items: list, key_or_index: KeyOrIndex):
    # bool is an int subclass; treat it as a key lookup that never matches
    if isinstance(key_or_index, int) and not isinstance(key_or_index, bool):
        if 0 <= key_or_index < len(items):
            return items[key_or_index]
        return None
    return next((item for item in items if item.id == key_or_index), None)


__all__ = ["ContentStore", "StoreState"]
