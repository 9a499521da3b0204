"""Collection endpoints: events, news, drivers, courses, videos, gallery photos.

Each collection gets ``GET /api/<name>`` (missing file -> ``[]``) and
``POST /api/<name>`` (full overwrite with the submitted list).
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from forsaj.api.dependencies import get_collection_store
from forsaj.api.middleware.auth import require_admin_auth
from forsaj.observability.logging import get_logger
from forsaj.records.repository import COLLECTIONS, RecordRepository
from forsaj.storage.json_store import JsonCollectionStore

router = APIRouter(prefix="/api", tags=["records"])
logger = get_logger(__name__)


def _register(name: str) -> None:
    spec = COLLECTIONS[name]

    async def list_records(
        store: JsonCollectionStore = Depends(get_collection_store),
    ) -> list[Any]:
        return RecordRepository(store, spec).load_all()

    async def save_records(
        records: list[dict[str, Any]],
        store: JsonCollectionStore = Depends(get_collection_store),
        authenticated: bool = Depends(require_admin_auth),
    ) -> dict[str, Any]:
        saved = RecordRepository(store, spec).replace_all(records)
        return {"success": True, "count": len(saved), "items": saved}

    list_records.__name__ = f"list_{name.replace('-', '_')}"
    save_records.__name__ = f"save_{name.replace('-', '_')}"
    router.add_api_route(f"/{name}", list_records, methods=["GET"])
    router.add_api_route(f"/{name}", save_records, methods=["POST"])


for _name in COLLECTIONS:
    _register(_name)
