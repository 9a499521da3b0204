"""
Application-wide settings and environment configuration
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
FORSAJ_ROOT = Path(__file__).parent.parent

# Environment
ENV = os.getenv("FORSAJ_ENV", "development")
DEBUG = ENV == "development"

# API Configuration
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("PORT", "3001"))
LOG_LEVEL = os.getenv("FORSAJ_LOG_LEVEL", "INFO")

# Filesystem layout (front/ holds the public site, public/ the admin panel assets)
DEFAULT_FRONT_DIR = PROJECT_ROOT / "front"
DEFAULT_DATA_DIR = DEFAULT_FRONT_DIR / "public"
DEFAULT_ADMIN_DIR = PROJECT_ROOT / "public"

# Hosted auth/profile backend (optional)
SUPABASE_URL = os.getenv("FORSAJ_SUPABASE_URL")
SUPABASE_KEY = os.getenv("FORSAJ_SUPABASE_KEY")


def _path_from_env(key: str, default: Path) -> Path:
    value = os.getenv(key)
    return Path(value) if value else default


@dataclass
class Settings:
    """Filesystem and backend locations for one application instance.

    Read from the environment by ``from_env``; tests build their own instance
    pointing at temporary directories.
    """

    data_dir: Path
    upload_dir: Path
    admin_dir: Path
    front_dir: Path
    components_subdir: str = "components"
    entry_file: str = "App.tsx"
    admin_api_key: str | None = None
    supabase_url: str | None = None
    supabase_key: str | None = None
    allowed_origins: list[str] = field(default_factory=list)

    @classmethod
    def from_env(cls) -> Settings:
        data_dir = _path_from_env("FORSAJ_DATA_DIR", DEFAULT_DATA_DIR)
        origins = os.getenv("FORSAJ_ALLOWED_ORIGINS", "")
        return cls(
            data_dir=data_dir,
            upload_dir=_path_from_env("FORSAJ_UPLOAD_DIR", data_dir / "uploads"),
            admin_dir=_path_from_env("FORSAJ_ADMIN_DIR", DEFAULT_ADMIN_DIR),
            front_dir=_path_from_env("FORSAJ_FRONT_DIR", DEFAULT_FRONT_DIR),
            admin_api_key=os.getenv("FORSAJ_ADMIN_API_KEY") or None,
            supabase_url=SUPABASE_URL,
            supabase_key=SUPABASE_KEY,
            allowed_origins=[o.strip() for o in origins.split(",") if o.strip()],
        )

    @property
    def components_dir(self) -> Path:
        return self.front_dir / self.components_subdir

    @property
    def entry_path(self) -> Path:
        return self.front_dir / self.entry_file

    @property
    def content_path(self) -> Path:
        return self.data_dir / "site-content.json"

    @property
    def sitemap_path(self) -> Path:
        return self.admin_dir / "sitemap.json"

    @property
    def users_path(self) -> Path:
        return self.data_dir / "users.json"

    def ensure_directories(self) -> None:
        """Create the data and upload directories if missing."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.upload_dir.mkdir(parents=True, exist_ok=True)


def is_production() -> bool:
    """Check if running in production"""
    return ENV == "production"


def is_development() -> bool:
    """Check if running in development"""
    return ENV == "development"
