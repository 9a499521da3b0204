"""
Record repository - load/save for the flat JSON collections.

Saves are full overwrites: the submitted list becomes the stored list, with
no merge against what was there before. Records sent without an id get the
next free integer id, and a per-collection normalizer runs before every save
(driver ranks).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from forsaj.observability.logging import get_logger
from forsaj.observability.telemetry import log_event
from forsaj.records.models import (
    Course,
    DriverCategory,
    Event,
    GalleryPhoto,
    NewsItem,
    VideoItem,
    assign_missing_ids,
)
from forsaj.records.rankings import rank_categories
from forsaj.storage.json_store import JsonCollectionStore
from forsaj.utils.errors import ValidationFailureError

logger = get_logger(__name__)


@dataclass(frozen=True)
class CollectionSpec:
    """How one collection is named, validated and normalized."""

    name: str
    model: type[BaseModel]
    normalize: Callable[[list[Any]], list[Any]] | None = None


COLLECTIONS: dict[str, CollectionSpec] = {
    spec.name: spec
    for spec in (
        CollectionSpec("events", Event),
        CollectionSpec("news", NewsItem),
        CollectionSpec("drivers", DriverCategory, normalize=rank_categories),
        CollectionSpec("courses", Course),
        CollectionSpec("videos", VideoItem),
        CollectionSpec("gallery-photos", GalleryPhoto),
    )
}


class RecordRepository:
    """Validated access to one named collection."""

    def __init__(self, store: JsonCollectionStore, spec: CollectionSpec) -> None:
        self.store = store
        self.spec = spec

    @property
    def name(self) -> str:
        return self.spec.name

    def _validate(self, raw: list[Any]) -> list[Any]:
        try:
            return [self.spec.model.model_validate(item) for item in raw]
        except ValidationError as e:
            raise ValidationFailureError(
                f"Invalid {self.name} record: {e.error_count()} field errors"
            ) from e

    def load_all(self) -> list[dict]:
        """Stored records as JSON-ready dicts; a missing file is an empty list."""
        return self.store.load(self.name)

    def replace_all(self, raw: list[Any]) -> list[dict]:
        """
        Validate, normalize and store ``raw`` as the whole collection.

        Returns:
            The records exactly as stored

        Side Effects:
            - Overwrites the collection file
        """
        records = assign_missing_ids(self._validate(raw))
        if self.spec.normalize is not None:
            records = self.spec.normalize(records)
        payload = [record.to_json() for record in records]
        self.store.save(self.name, payload)
        log_event("records.saved", collection=self.name, count=len(payload))
        return payload


def get_repository(store: JsonCollectionStore, name: str) -> RecordRepository:
    spec = COLLECTIONS.get(name)
    if spec is None:
        raise KeyError(f"Unknown collection: {name}")
    return RecordRepository(store, spec)


__all__ = ["COLLECTIONS", "CollectionSpec", "RecordRepository", "get_repository"]
