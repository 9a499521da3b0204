"""
JSON document storage for flat collections and the content manifest.

Every resource is one JSON file under a root directory. Writes go through a
per-resource lock and an atomic replace, so two overlapping saves of the same
resource are applied one after the other and readers never observe a
half-written file. Content-wise the last writer still wins: a save replaces
the whole document.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any

from forsaj.observability.logging import get_logger
from forsaj.observability.telemetry import counter
from forsaj.utils.errors import IOFailureError, ValidationFailureError

logger = get_logger(__name__)

_LOCKS: dict[Path, threading.Lock] = {}
_LOCKS_GUARD = threading.Lock()


def resource_lock(path: Path) -> threading.Lock:
    """Return the process-wide lock for a resource path."""
    key = path.resolve()
    with _LOCKS_GUARD:
        lock = _LOCKS.get(key)
        if lock is None:
            lock = threading.Lock()
            _LOCKS[key] = lock
        return lock


def read_json(path: Path, default: Any) -> Any:
    """
    Read a JSON document, returning ``default`` when the file is missing.

    Raises:
        IOFailureError: file exists but cannot be read or parsed
    """
    if not path.exists():
        return default
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Failed to read %s: %s", path, e)
        counter("storage.read_errors")
        raise IOFailureError(f"Failed to read {path.name}") from e


def write_json(path: Path, data: Any) -> None:
    """
    Replace a JSON document atomically under its resource lock.

    Side Effects:
        - Creates parent directory if missing
        - Writes a temp file next to ``path`` and renames it over ``path``

    Raises:
        IOFailureError: directory or file not writable
    """
    with resource_lock(path):
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error("Failed to write %s: %s", path, e)
            counter("storage.write_errors")
            raise IOFailureError(f"Failed to write {path.name}") from e


class JsonCollectionStore:
    """One JSON array per named collection inside ``root``."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def path_for(self, name: str) -> Path:
        if not name.replace("-", "").replace("_", "").isalnum():
            raise ValueError(f"Invalid collection name: {name}")
        return self.root / f"{name}.json"

    def load(self, name: str) -> list[Any]:
        data = read_json(self.path_for(name), default=[])
        if not isinstance(data, list):
            raise ValidationFailureError(f"Collection {name} is not a JSON array")
        return data

    def save(self, name: str, records: list[Any]) -> None:
        write_json(self.path_for(name), records)
        logger.info("Saved collection %s (%d records)", name, len(records))


__all__ = ["JsonCollectionStore", "read_json", "resource_lock", "write_json"]
