"""Image upload endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile

from forsaj.api.dependencies import get_settings
from forsaj.api.middleware.auth import require_admin_auth
from forsaj.config import UPLOAD_MAX_BYTES, Settings
from forsaj.observability.logging import get_logger
from forsaj.observability.telemetry import counter, log_event
from forsaj.storage.uploads import save_upload
from forsaj.utils.errors import ValidationFailureError
from forsaj.utils.validators import ValidationError, validate_image_filename

router = APIRouter(prefix="/api", tags=["uploads"])
logger = get_logger(__name__)


@router.post("/upload-image")
async def upload_image(
    image: UploadFile | None = File(None),
    settings: Settings = Depends(get_settings),
    authenticated: bool = Depends(require_admin_auth),
) -> dict[str, str]:
    """
    Store one uploaded image under a generated name.

    Returns:
        ``{"url": "/uploads/<name>"}``

    Side Effects:
        - Writes a new file into the upload directory
    """
    if image is None:
        raise ValidationFailureError("No file uploaded", "Fayl yüklənməyib")

    try:
        extension = validate_image_filename(image.filename)
    except ValidationError as e:
        raise ValidationFailureError(str(e), "Yalnız şəkil faylları qəbul edilir") from e

    data = await image.read()
    if len(data) > UPLOAD_MAX_BYTES:
        raise ValidationFailureError(
            f"File exceeds {UPLOAD_MAX_BYTES} bytes", "Fayl həcmi çox böyükdür"
        )

    url = save_upload(settings.upload_dir, extension, data)
    counter("uploads.images")
    log_event("uploads.stored", url=url, size=len(data))
    return {"url": url}
