"""Storage - JSON documents and uploaded images"""

from __future__ import annotations

from forsaj.storage.json_store import JsonCollectionStore, read_json, resource_lock, write_json
from forsaj.storage.uploads import list_images, save_upload

__all__ = [
    "JsonCollectionStore",
    "list_images",
    "read_json",
    "resource_lock",
    "save_upload",
    "write_json",
]
