"""Content manifest endpoints.

Extraction regenerates the manifest from the front-end sources; the editor
then reads and saves it wholesale. After every write the in-process
ContentStore is reloaded so page lookups see the new manifest.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from forsaj.api.dependencies import (
    get_content_service,
    get_content_store,
    get_settings,
)
from forsaj.api.middleware.auth import require_admin_auth
from forsaj.config import Settings
from forsaj.content.models import Page, pages_to_json
from forsaj.content.reader import ContentStore
from forsaj.content.service import ContentService
from forsaj.observability.logging import get_logger
from forsaj.observability.telemetry import log_event
from forsaj.storage.uploads import list_images
from forsaj.utils.errors import NotFoundError, ValidationFailureError
from forsaj.utils.validators import ValidationError, validate_page_id

router = APIRouter(prefix="/api", tags=["content"])
logger = get_logger(__name__)


def reload_content_store(request: Request) -> None:
    """Refresh the app's ContentStore from the manifest on disk."""
    service: ContentService = request.app.state.content_service
    store: ContentStore = request.app.state.content_store
    store.load_from(service.load_pages)


@router.post("/extract-content")
async def extract_content(
    request: Request,
    service: ContentService = Depends(get_content_service),
    authenticated: bool = Depends(require_admin_auth),
) -> dict[str, Any]:
    """
    Scan the front-end sources and regenerate the manifest and sitemap.

    Side Effects:
        - Overwrites site-content.json and sitemap.json
        - Reloads the in-process ContentStore
    """
    result = service.extract()
    reload_content_store(request)
    return result.to_json()


@router.get("/get-content")
@router.get("/site-content")
async def get_content(service: ContentService = Depends(get_content_service)) -> list[dict]:
    return pages_to_json(service.load_pages())


@router.post("/save-content")
async def save_content(
    pages: list[Page],
    request: Request,
    service: ContentService = Depends(get_content_service),
    authenticated: bool = Depends(require_admin_auth),
) -> dict[str, Any]:
    """
    Replace the manifest with the editor's pages.

    Side Effects:
        - Overwrites site-content.json (no merge with the previous manifest)
        - Reloads the in-process ContentStore
    """
    service.save_pages(pages)
    reload_content_store(request)
    return {"success": True, "count": len(pages)}


@router.get("/pages/{page_id}")
async def get_page(
    page_id: str,
    store: ContentStore = Depends(get_content_store),
) -> dict[str, Any]:
    try:
        page_id = validate_page_id(page_id)
    except ValidationError as e:
        raise ValidationFailureError(str(e)) from e

    page = store.get(page_id)
    if page is None:
        raise NotFoundError(f"Page {page_id} not found", "Səhifə tapılmadı")
    return page.to_json()


@router.get("/sitemap")
async def get_sitemap(service: ContentService = Depends(get_content_service)) -> list[dict]:
    return service.read_sitemap()


@router.get("/all-images")
async def all_images(settings: Settings = Depends(get_settings)) -> dict[str, list[str]]:
    images = list_images(settings.data_dir)
    log_event("content.images_listed", count=len(images))
    return {"local": images}
