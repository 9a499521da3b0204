"""
Page assembler: turns one file's candidates into a manifest page.

Ordering is recovered once here, by sorting every candidate on its source
offset and partitioning the result into sections and images. Synthesized ids
are a pass prefix, a slug of the value and a short hash of
(page id, pass, value, occurrence), so re-running extraction over unchanged
sources yields the same ids.
"""

from __future__ import annotations

import hashlib
import re

from forsaj.config import ID_HASH_LENGTH, LABEL_MAX_LENGTH, SLUG_MAX_LENGTH
from forsaj.content.models import ImageOrigin, ImageRef, Page, TextSection
from forsaj.content.types import ID_PREFIXES, Candidate, CandidateKind

# Display names for known page ids
PAGE_TITLES: dict[str, str] = {
    "app": "Əsas Tətbiq",
    "home": "Ana Səhifə",
    "homepage": "Ana Səhifə",
    "hero": "Giriş Bloku",
    "navbar": "Naviqasiya",
    "footer": "Alt Hissə",
    "about": "Haqqımızda",
    "aboutpage": "Haqqımızda",
    "news": "Xəbərlər",
    "newspage": "Xəbərlər",
    "events": "Tədbirlər",
    "eventspage": "Tədbirlər",
    "drivers": "Sürücülər",
    "driverspage": "Sürücülər",
    "categoryleaders": "Kateqoriya Liderləri",
    "gallery": "Qalereya",
    "gallerypage": "Qalereya",
    "rules": "Qaydalar",
    "rulespage": "Qaydalar",
    "contact": "Əlaqə",
    "contactpage": "Əlaqə",
    "csplayer": "Video Pleyer",
}

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


def page_title(page_id: str, file_stem: str) -> str:
    return PAGE_TITLES.get(page_id, file_stem)


def slugify(text: str, max_length: int = SLUG_MAX_LENGTH) -> str:
    """Lowercase, collapse non-alphanumerics to ``-``, truncate."""
    return _SLUG_STRIP.sub("-", text[:max_length].lower()).strip("-")


def stable_suffix(page_id: str, source: str, value: str, occurrence: int) -> str:
    digest = hashlib.sha1(f"{page_id}\x1f{source}\x1f{value}\x1f{occurrence}".encode())
    return digest.hexdigest()[:ID_HASH_LENGTH]


def text_label(candidate: Candidate) -> str:
    text = candidate.value
    if candidate.key is not None:
        return candidate.key.replace("-", " ").replace("_", " ").upper()
    if candidate.attribute is not None:
        return f"{candidate.attribute.upper()}: {text[:20]}..."
    suffix = "..." if len(text) > LABEL_MAX_LENGTH else ""
    return text[:LABEL_MAX_LENGTH].upper() + suffix


def image_origin(path: str) -> ImageOrigin:
    if path.startswith(("http://", "https://", "//")):
        return ImageOrigin.REMOTE
    return ImageOrigin.LOCAL


class PageAssembler:
    """Build ``Page`` objects from scanned candidates."""

    def _synthesize_id(self, page_id: str, candidate: Candidate, taken: set[str]) -> str:
        prefix = ID_PREFIXES[candidate.source]
        slug = slugify(candidate.value) if candidate.kind == CandidateKind.TEXT else ""
        stem = f"{prefix}-{slug}" if slug else prefix
        occurrence = 0
        while True:
            suffix = stable_suffix(page_id, candidate.source.value, candidate.value, occurrence)
            item_id = f"{stem}-{suffix}"
            if item_id not in taken:
                return item_id
            occurrence += 1

    def assemble(self, file_stem: str, candidates: list[Candidate]) -> Page | None:
        """
        Build the page for one file, or None when nothing was found.

        Args:
            file_stem: source file name without extension
            candidates: scanner output for that file, any order
        """
        page_id = file_stem.lower()
        ordered = sorted(candidates, key=lambda c: c.position)

        # Keyed ids are claimed first so a synthesized id can never shadow one
        taken: set[str] = {c.key for c in ordered if c.key is not None}
        sections: list[TextSection] = []
        images: list[ImageRef] = []

        for candidate in ordered:
            if candidate.key is not None:
                item_id = candidate.key
            else:
                item_id = self._synthesize_id(page_id, candidate, taken)
                taken.add(item_id)

            if candidate.kind == CandidateKind.IMAGE:
                images.append(
                    ImageRef(id=item_id, path=candidate.value, origin=image_origin(candidate.value))
                )
            else:
                sections.append(
                    TextSection(id=item_id, label=text_label(candidate), value=candidate.value)
                )

        page = Page(
            id=page_id,
            title=page_title(page_id, file_stem),
            sections=sections,
            images=images,
        )
        return None if page.is_empty() else page


__all__ = ["PAGE_TITLES", "PageAssembler", "page_title", "slugify", "stable_suffix"]
