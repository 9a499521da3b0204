"""
Manifest writer: orders pages, persists the manifest and derives the sitemap.

The manifest file is always replaced wholesale. The sitemap is a separate
artifact for the admin panel navigation; its per-page entries are built by
interpolating page ids into editor URLs, so a renamed page simply gets a new
link on the next run.
"""

from __future__ import annotations

from pathlib import Path

from forsaj.content.models import ExtractionStats, Page, SitemapNode, pages_to_json
from forsaj.observability.logging import get_logger
from forsaj.storage.json_store import read_json, write_json
from forsaj.utils.errors import IOFailureError

logger = get_logger(__name__)

# Known page ids, most prominent first; "...page" variants share the base rank
PAGE_PRIORITY: tuple[str, ...] = (
    "home",
    "about",
    "news",
    "events",
    "drivers",
    "gallery",
    "rules",
    "contact",
)
_PRIORITY_INDEX: dict[str, int] = {}
for _rank, _base in enumerate(PAGE_PRIORITY):
    _PRIORITY_INDEX[_base] = _rank
    _PRIORITY_INDEX[f"{_base}page"] = _rank

COMPONENTS_GROUP_TITLE = "Komponentlər"

DEFAULT_SITEMAP: list[SitemapNode] = [SitemapNode(title="Sayt Redaktoru", icon="Globe", path="/")]


def page_priority(page_id: str) -> int:
    """Rank of a page id; unknown ids sort after every known one."""
    return _PRIORITY_INDEX.get(page_id, len(PAGE_PRIORITY))


def order_pages(pages: list[Page]) -> list[Page]:
    # sorted() is stable, so unknown ids keep their scan order
    return sorted(pages, key=lambda page: page_priority(page.id))


def build_sitemap(pages: list[Page]) -> list[SitemapNode]:
    """Hardcoded navigation groups plus one component entry per page."""
    return [
        SitemapNode(title="Sayt Redaktoru", icon="Globe", path="/"),
        SitemapNode(title="Xəbər İdarəetmə", icon="FileText", path="/?mode=news"),
        SitemapNode(title="Tədbir Təqvimi", icon="Calendar", path="/?mode=events"),
        SitemapNode(title="Sürücü Reytinqi", icon="Trophy", path="/?mode=drivers"),
        SitemapNode(title="Video Arxivi", icon="Video", path="/?mode=videos"),
        SitemapNode(title="Foto Qalereya", icon="Image", path="/?mode=photos"),
        SitemapNode(title="Kurs İdarəetməsi", icon="BookOpen", path="/courses"),
        SitemapNode(
            title=COMPONENTS_GROUP_TITLE,
            icon="Layers",
            children=[
                SitemapNode(title=page.title, icon="Layout", path=f"/?page={page.id}")
                for page in pages
            ],
        ),
        SitemapNode(title="İstifadəçilər", icon="Users", path="/users"),
        SitemapNode(title="Frontend Ayarları", icon="Settings", path="/frontend-settings"),
    ]


def compute_stats(pages: list[Page]) -> ExtractionStats:
    return ExtractionStats(
        total=len(pages),
        sections=sum(len(page.sections) for page in pages),
        images=sum(len(page.images) for page in pages),
    )


def sitemap_to_json(nodes: list[SitemapNode]) -> list[dict]:
    return [node.to_json() for node in nodes]


class ManifestWriter:
    """Persist the content manifest and the sitemap to their files."""

    def __init__(self, content_path: Path, sitemap_path: Path) -> None:
        self.content_path = content_path
        self.sitemap_path = sitemap_path

    def write(self, pages: list[Page]) -> list[SitemapNode]:
        """
        Replace the manifest with ``pages`` and regenerate the sitemap.

        Pages are expected to be ordered already (see ``order_pages``).

        Side Effects:
            - Overwrites content_path
            - Overwrites sitemap_path

        Raises:
            IOFailureError: manifest could not be written. A sitemap write
            failure is logged and does not fail the run.
        """
        write_json(self.content_path, pages_to_json(pages))

        sitemap = build_sitemap(pages)
        try:
            write_json(self.sitemap_path, sitemap_to_json(sitemap))
            logger.info("Sitemap generated at %s", self.sitemap_path)
        except IOFailureError as e:
            logger.error("Failed to write sitemap: %s", e)
        return sitemap

    def read_sitemap(self) -> list[dict]:
        try:
            data = read_json(self.sitemap_path, default=None)
        except IOFailureError:
            data = None
        if not isinstance(data, list) or not data:
            return sitemap_to_json(DEFAULT_SITEMAP)
        return data


__all__ = [
    "DEFAULT_SITEMAP",
    "ManifestWriter",
    "PAGE_PRIORITY",
    "build_sitemap",
    "compute_stats",
    "order_pages",
    "page_priority",
    "sitemap_to_json",
]
