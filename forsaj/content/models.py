"""
Content manifest domain models.

A manifest is an ordered list of pages; each page carries the editable text
sections and image references extracted from one UI source file. Field names
are serialized in the camelCase shape the admin editor and public site read
(``isActive``, and ``type`` for an image's origin).
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from forsaj.config import DEFAULT_IMAGE_ALT


class ImageOrigin(str, Enum):
    """Where an image path is hosted."""

    LOCAL = "local"  # Served by this app (relative path or upload)
    REMOTE = "remote"  # Absolute URL on another host


class TextSection(BaseModel):
    """An editable text slot on a page."""

    model_config = ConfigDict(extra="allow")

    id: str
    type: str = "text"
    label: str = ""
    value: str = ""


class ImageRef(BaseModel):
    """An editable image slot on a page."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, use_enum_values=True)

    id: str
    path: str
    alt: str = DEFAULT_IMAGE_ALT
    origin: ImageOrigin = Field(default=ImageOrigin.LOCAL, alias="type")


class Page(BaseModel):
    """All editable content extracted from one source file."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str
    title: str
    sections: list[TextSection] = Field(default_factory=list)
    images: list[ImageRef] = Field(default_factory=list)
    is_active: bool = Field(default=True, alias="isActive")

    def is_empty(self) -> bool:
        return not self.sections and not self.images

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class SitemapNode(BaseModel):
    """One entry of the admin navigation tree."""

    title: str
    icon: str
    path: str | None = None
    children: list[SitemapNode] | None = None

    def to_json(self) -> dict:
        return self.model_dump(exclude_none=True)


class ExtractionStats(BaseModel):
    """Totals reported after an extraction run."""

    total: int = 0
    sections: int = 0
    images: int = 0


def pages_to_json(pages: list[Page]) -> list[dict]:
    return [page.to_json() for page in pages]


def pages_from_json(data: list) -> list[Page]:
    return [Page.model_validate(item) for item in data]
