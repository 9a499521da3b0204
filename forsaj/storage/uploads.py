"""
Image upload storage on local disk.

Uploaded files are written under the configured upload directory with a
generated name (``<epoch-ms>-<random>.<ext>``) and served statically from
``UPLOAD_URL_PREFIX``.
"""

from __future__ import annotations

import os
import secrets
import time
from pathlib import Path

from forsaj.config import IMAGE_EXTENSIONS, UPLOAD_URL_PREFIX
from forsaj.observability.logging import get_logger
from forsaj.utils.errors import IOFailureError

logger = get_logger(__name__)

_SKIP_DIRS = {"node_modules", ".git"}


def generate_upload_name(extension: str) -> str:
    """Build a collision-resistant file name from the clock and a random suffix."""
    timestamp_ms = int(time.time() * 1000)
    return f"{timestamp_ms}-{secrets.randbelow(10**9)}{extension}"


def save_upload(upload_dir: Path, extension: str, data: bytes) -> str:
    """
    Write uploaded bytes to disk and return the public URL path.

    Side Effects:
        - Creates upload_dir if missing
        - Writes one new file

    Raises:
        IOFailureError: upload directory not writable
    """
    filename = generate_upload_name(extension)
    target = upload_dir / filename
    try:
        upload_dir.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
    except OSError as e:
        logger.error("Failed to store upload %s: %s", target, e)
        raise IOFailureError("Failed to store uploaded image") from e

    logger.info("Stored upload %s (%d bytes)", filename, len(data))
    return f"{UPLOAD_URL_PREFIX}/{filename}"


def list_images(public_dir: Path) -> list[str]:
    """Recursively list image files under ``public_dir`` as URL paths."""
    if not public_dir.exists():
        return []

    images: list[str] = []
    for dirpath, dirnames, filenames in os.walk(public_dir):
        dirnames[:] = sorted(d for d in dirnames if d not in _SKIP_DIRS)
        for name in sorted(filenames):
            if Path(name).suffix.lower() in IMAGE_EXTENSIONS:
                relative = (Path(dirpath) / name).relative_to(public_dir)
                images.append("/" + relative.as_posix())
    return images
