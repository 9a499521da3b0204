"""Forsaj admin backend - content extraction and CMS API for the Forsaj motorsport club site"""

from __future__ import annotations

__version__ = "1.0.0"


# Lazy imports so lightweight modules load without FastAPI
def __getattr__(name: str):
    if name in ("ContentService", "ContentStore"):
        from forsaj.content import reader, service

        if name == "ContentService":
            return service.ContentService
        return reader.ContentStore

    if name == "is_candidate_text":
        from forsaj.content.classifier import is_candidate_text

        return is_candidate_text

    if name == "create_app":
        from forsaj.api.app import create_app

        return create_app

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "ContentService",
    "ContentStore",
    "create_app",
    "is_candidate_text",
]
