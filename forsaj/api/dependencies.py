"""Accessors for the per-app services built in ``create_app``."""

from __future__ import annotations

from fastapi import Request

from forsaj.accounts.service import AccountService
from forsaj.config import Settings
from forsaj.content.reader import ContentStore
from forsaj.content.service import ContentService
from forsaj.storage.json_store import JsonCollectionStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_content_service(request: Request) -> ContentService:
    return request.app.state.content_service


def get_content_store(request: Request) -> ContentStore:
    return request.app.state.content_store


def get_collection_store(request: Request) -> JsonCollectionStore:
    return request.app.state.collections


def get_account_service(request: Request) -> AccountService:
    return request.app.state.accounts
