"""Health, service banner and host status endpoints.

- /health - liveness probe
- / - service banner with the main endpoints
- /api/frontend/status - host CPU, RAM and uptime for the dashboard widget
"""

from __future__ import annotations

import platform
import time
from datetime import UTC, datetime
from typing import Any

import psutil
from fastapi import APIRouter, Body, Depends

from forsaj.api.dependencies import get_content_store
from forsaj.api.middleware.auth import require_admin_auth
from forsaj.config import APP_VERSION, FRONTEND_DEV_PORT, SERVICE_NAME
from forsaj.content.reader import ContentStore
from forsaj.observability.telemetry import log_event

router = APIRouter(tags=["health"])

_GB = 1024**3


def format_uptime(seconds: float) -> str:
    """``93784`` -> ``"1d 2h 3m"``"""
    seconds = int(seconds)
    days, rest = divmod(seconds, 86400)
    hours, rest = divmod(rest, 3600)
    return f"{days}d {hours}h {rest // 60}m"


def host_stats() -> dict[str, Any]:
    """Snapshot of host load. CPU is the 1-minute load average per core."""
    load_1m = psutil.getloadavg()[0]
    cores = psutil.cpu_count() or 1
    memory = psutil.virtual_memory()
    used = memory.total - memory.available
    return {
        "cpu": min(100, round(load_1m / cores * 100)),
        "ram": {
            "total": round(memory.total / _GB, 1),
            "used": round(used / _GB, 1),
            "percentage": round(used / memory.total * 100),
        },
        "versions": {
            "project": APP_VERSION,
            "python": platform.python_version(),
        },
        "uptime": format_uptime(time.time() - psutil.boot_time()),
    }


@router.get("/health")
async def health_check(store: ContentStore = Depends(get_content_store)) -> dict[str, Any]:
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": APP_VERSION,
        "timestamp": datetime.now(UTC).isoformat(),
        "content": {
            "state": store.state.value,
            "pages": len(store.pages()),
        },
    }


@router.get("/")
def root() -> dict[str, Any]:
    return {
        "service": SERVICE_NAME,
        "version": APP_VERSION,
        "status": "running",
        "endpoints": {
            "health": "/health",
            "extract": "/api/extract-content",
            "content": "/api/get-content",
            "sitemap": "/api/sitemap",
            "upload": "/api/upload-image",
            "users": "/api/users",
            "frontend_status": "/api/frontend/status",
        },
    }


@router.get("/api/frontend/status")
async def frontend_status() -> dict[str, Any]:
    return {"status": "running", "port": FRONTEND_DEV_PORT, "stats": host_stats()}


@router.post("/api/frontend/action")
async def frontend_action(
    payload: dict[str, Any] | None = Body(None),
    authenticated: bool = Depends(require_admin_auth),
) -> dict[str, str]:
    """Accept a start/stop/restart request for the public site; nothing is run."""
    action = (payload or {}).get("action", "")
    log_event("frontend.action", action=str(action))
    return {"status": "running"}
