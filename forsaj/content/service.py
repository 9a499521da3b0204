"""
Content service: one extraction run and manifest read/write.

Pipeline per run:
    scan sources -> assemble one page per file -> order pages
    -> write manifest + sitemap -> report stats

Each run regenerates the manifest from scratch; edits saved since the last
run are replaced.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from forsaj.content.assembler import PageAssembler
from forsaj.content.manifest import ManifestWriter, compute_stats, order_pages
from forsaj.content.models import ExtractionStats, Page, SitemapNode, pages_from_json, pages_to_json
from forsaj.content.scanner import scan_directory
from forsaj.content.types import Scanner
from forsaj.observability.logging import get_logger
from forsaj.observability.telemetry import counter, log_event, time_block
from forsaj.storage.json_store import read_json, write_json
from forsaj.utils.errors import ValidationFailureError

logger = get_logger(__name__)


@dataclass
class ExtractionResult:
    """Outcome of one extraction run."""

    pages: list[Page]
    stats: ExtractionStats
    sitemap: list[SitemapNode]

    def to_json(self) -> dict:
        return {
            "pages": pages_to_json(self.pages),
            "stats": self.stats.model_dump(),
            "sitemap": [node.to_json() for node in self.sitemap],
        }


class ContentService:
    """Coordinates scanning, assembly and persistence of the manifest."""

    def __init__(
        self,
        components_dir: Path,
        content_path: Path,
        sitemap_path: Path,
        entry_file: Path | None = None,
        scanner: Scanner | None = None,
    ) -> None:
        self.components_dir = components_dir
        self.entry_file = entry_file
        self.content_path = content_path
        self.scanner = scanner
        self.assembler = PageAssembler()
        self.writer = ManifestWriter(content_path, sitemap_path)

    def build_pages(self) -> list[Page]:
        """Scan and assemble without writing anything."""
        pages: list[Page] = []
        for scanned in scan_directory(self.components_dir, self.entry_file, self.scanner):
            page = self.assembler.assemble(scanned.stem, scanned.candidates)
            if page is None:
                logger.debug("No content found in %s", scanned.path.name)
                continue
            pages.append(page)
        return order_pages(pages)

    def extract(self) -> ExtractionResult:
        """
        Run a full extraction and replace the manifest.

        Side Effects:
            - Overwrites the manifest and sitemap files
            - Logs an ``content.extracted`` event
        """
        logger.info("Starting content extraction from %s", self.components_dir)
        with time_block("content.extract"):
            pages = self.build_pages()
            sitemap = self.writer.write(pages)
        stats = compute_stats(pages)
        counter("content.extractions")
        log_event(
            "content.extracted",
            pages=stats.total,
            sections=stats.sections,
            images=stats.images,
        )
        return ExtractionResult(pages=pages, stats=stats, sitemap=sitemap)

    def load_pages(self) -> list[Page]:
        """Read the manifest; a missing file is an empty manifest."""
        data = read_json(self.content_path, default=[])
        if not isinstance(data, list):
            raise ValidationFailureError("Content manifest is not a JSON array")
        try:
            return pages_from_json(data)
        except ValidationError as e:
            raise ValidationFailureError(f"Content manifest is malformed: {e.error_count()} errors") from e

    def save_pages(self, pages: list[Page]) -> None:
        """Replace the manifest with operator-edited pages (no merge)."""
        write_json(self.content_path, pages_to_json(pages))
        log_event("content.saved", pages=len(pages))

    def read_sitemap(self) -> list[dict]:
        return self.writer.read_sitemap()


__all__ = ["ContentService", "ExtractionResult"]
