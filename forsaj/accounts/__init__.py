"""Admin accounts: profile stores, login sessions and account rules"""

from __future__ import annotations

from forsaj.accounts.models import (
    AdminRole,
    AdminUser,
    LoginRequest,
    LoginResponse,
    SetupRequest,
    UserUpsertRequest,
)
from forsaj.accounts.service import AccountService
from forsaj.accounts.sessions import SessionRegistry
from forsaj.accounts.store import LocalProfileStore, ProfileStore, RemoteProfileStore

__all__ = [
    "AccountService",
    "AdminRole",
    "AdminUser",
    "LocalProfileStore",
    "LoginRequest",
    "LoginResponse",
    "ProfileStore",
    "RemoteProfileStore",
    "SessionRegistry",
    "SetupRequest",
    "UserUpsertRequest",
]
