"""
Operator-managed record models: events, news, drivers, courses, videos and
gallery photos.

Each collection is persisted as one JSON array and saved wholesale by the
editor. JSON keys are camelCase (``pdfUrl``, ``youtubeUrl``, ``createdAt``)
to match what the admin panel and public site exchange; unknown keys sent by
the editor are kept.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

RecordId = int | str

_YOUTUBE_ID = re.compile(r"^.*(youtu\.be/|v/|u/\w/|embed/|shorts/|watch\?v=|&v=)([^#&?]*).*")
YOUTUBE_THUMBNAIL = "https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"


def utc_now_iso() -> str:
    return datetime.now(UTC).isoformat()


def extract_youtube_id(url: str) -> str | None:
    """Return the 11-character video id from a YouTube URL, if any."""
    match = _YOUTUBE_ID.match(url or "")
    if match and len(match.group(2)) == 11:
        return match.group(2)
    return None


class RecordModel(BaseModel):
    """Base for collection records: camelCase JSON, extra keys preserved."""

    model_config = ConfigDict(
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")

    def nested_records(self) -> tuple[list[RecordModel], ...]:
        """Child record lists that carry their own ids."""
        return ()


def _is_int_id(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def assign_missing_ids(records: list[RecordModel]) -> list[RecordModel]:
    """
    Give records sent without an id the next free integer among their siblings.

    Existing ids are left alone; nested lists (drivers, lessons) are numbered
    within their parent.
    """
    next_id = max((r.id for r in records if _is_int_id(r.id)), default=0) + 1
    for record in records:
        if record.id is None or record.id == "":
            record.id = next_id
            next_id += 1
        for children in record.nested_records():
            assign_missing_ids(children)
    return records


class Event(RecordModel):
    id: RecordId | None = None
    title: str = ""
    date: str = ""
    location: str = ""
    category: str = ""
    img: str = ""
    description: str = ""
    rules: str = ""
    pdf_url: str | None = None


class NewsStatus(str, Enum):
    PUBLISHED = "published"
    DRAFT = "draft"


class NewsItem(RecordModel):
    id: RecordId | None = None
    title: str = ""
    date: str = ""
    img: str = ""
    description: str = ""
    category: str | None = None
    status: NewsStatus = NewsStatus.PUBLISHED


class Driver(RecordModel):
    id: RecordId | None = None
    rank: int = 0
    name: str = ""
    license: str = ""
    team: str = ""
    wins: int = 0
    points: int | float = 0
    img: str = ""


class DriverCategory(RecordModel):
    id: RecordId | None = None
    name: str = ""
    drivers: list[Driver] = Field(default_factory=list)

    def nested_records(self) -> tuple[list[RecordModel], ...]:
        return (self.drivers,)


class CourseStatus(str, Enum):
    ACTIVE = "active"
    DRAFT = "draft"
    ARCHIVED = "archived"


class Lesson(RecordModel):
    id: RecordId | None = None
    title: str = ""
    duration: str = ""
    video_url: str | None = None
    content: str = ""
    order: int = 0


class Course(RecordModel):
    id: RecordId | None = None
    title: str = ""
    description: str = ""
    instructor: str = "Naməlum"
    thumbnail: str = ""
    price: int | float = 0
    students: int = 0
    lessons: list[Lesson] = Field(default_factory=list)
    status: CourseStatus = CourseStatus.DRAFT
    created_at: str = Field(default_factory=utc_now_iso)

    def nested_records(self) -> tuple[list[RecordModel], ...]:
        return (self.lessons,)

    @model_validator(mode="before")
    @classmethod
    def legacy_image_field(cls, data: object) -> object:
        # rows exported from the hosted backend call the thumbnail "image"
        if isinstance(data, dict) and not data.get("thumbnail") and data.get("image"):
            data = {**data, "thumbnail": data["image"]}
        return data

    @field_validator("price", mode="before")
    @classmethod
    def price_from_text(cls, v: object) -> object:
        if isinstance(v, str):
            try:
                return float(v)
            except ValueError:
                return 0
        return v


class VideoItem(RecordModel):
    id: RecordId | None = None
    title: str = ""
    youtube_url: str = ""
    video_id: str = ""
    duration: str = ""
    thumbnail: str = ""

    @model_validator(mode="after")
    def derive_youtube_fields(self) -> VideoItem:
        if not self.video_id:
            self.video_id = extract_youtube_id(self.youtube_url) or ""
        if not self.thumbnail and self.video_id:
            self.thumbnail = YOUTUBE_THUMBNAIL.format(video_id=self.video_id)
        return self


class GalleryPhoto(RecordModel):
    id: RecordId | None = None
    title: str = ""
    url: str = ""
