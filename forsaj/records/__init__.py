"""Operator-managed collections (events, news, drivers, courses, videos, gallery)"""

from __future__ import annotations

from forsaj.records.models import (
    Course,
    CourseStatus,
    Driver,
    DriverCategory,
    Event,
    GalleryPhoto,
    Lesson,
    NewsItem,
    NewsStatus,
    VideoItem,
    assign_missing_ids,
    extract_youtube_id,
)
from forsaj.records.rankings import rank_categories, rank_drivers
from forsaj.records.repository import COLLECTIONS, RecordRepository, get_repository

__all__ = [
    "COLLECTIONS",
    "Course",
    "CourseStatus",
    "Driver",
    "DriverCategory",
    "Event",
    "GalleryPhoto",
    "Lesson",
    "NewsItem",
    "NewsStatus",
    "RecordRepository",
    "VideoItem",
    "assign_missing_ids",
    "extract_youtube_id",
    "get_repository",
    "rank_categories",
    "rank_drivers",
]
