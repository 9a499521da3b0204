"""Centralized configuration for the Forsaj admin backend.

Re-exports everything from forsaj.infrastructure.settings so existing imports
continue to work, then adds typed constants for extraction, uploads, sessions
and the API.  Environment variable overrides use safe defaults so the app
starts without extra env configuration.
"""

from __future__ import annotations

import os

from forsaj.infrastructure.settings import *  # noqa: F401, F403  — re-export existing

# --- App ---
APP_VERSION: str = "1.0.0"
SERVICE_NAME: str = "Forsaj Admin API"

# --- Extraction ---
TEXT_MIN_LENGTH: int = 2
TEXT_MAX_LENGTH: int = 300
SLUG_MAX_LENGTH: int = 20
LABEL_MAX_LENGTH: int = 30
ID_HASH_LENGTH: int = 6
SOURCE_EXTENSIONS: tuple[str, ...] = (".tsx", ".jsx")
DEFAULT_IMAGE_ALT: str = "Extracted Image"

# --- Uploads ---
UPLOAD_URL_PREFIX: str = "/uploads"
IMAGE_EXTENSIONS: tuple[str, ...] = (".png", ".jpg", ".jpeg", ".svg", ".webp", ".gif")
UPLOAD_MAX_BYTES: int = int(os.getenv("FORSAJ_UPLOAD_MAX_BYTES", str(50 * 1024 * 1024)))

# --- Sessions ---
SESSION_TTL_SECONDS: int = int(os.getenv("FORSAJ_SESSION_TTL", "43200"))
SESSION_CACHE_MAX: int = 1000

# --- Accounts ---
PASSWORD_HASH_ITERATIONS: int = 200_000
VIRTUAL_EMAIL_DOMAIN: str = "forsaj.admin"
UPSTREAM_TIMEOUT_SECONDS: float = float(os.getenv("FORSAJ_UPSTREAM_TIMEOUT", "10.0"))

# --- API ---
FRONTEND_DEV_PORT: int = int(os.getenv("FORSAJ_FRONTEND_PORT", "5173"))
DEV_ALLOWED_ORIGINS: list[str] = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]
