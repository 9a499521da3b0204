"""
Login session tokens.

Tokens are opaque random strings kept in memory with a TTL. Restarting the
process logs everyone out, which is acceptable for a single-host admin panel.
"""

from __future__ import annotations

import secrets

from cachetools import TTLCache

from forsaj.accounts.models import AccountId, AdminUser
from forsaj.config import SESSION_CACHE_MAX, SESSION_TTL_SECONDS


class SessionRegistry:
    def __init__(self, ttl: int = SESSION_TTL_SECONDS, maxsize: int = SESSION_CACHE_MAX) -> None:
        self._sessions: TTLCache[str, AdminUser] = TTLCache(maxsize=maxsize, ttl=ttl)

    def issue(self, user: AdminUser) -> str:
        token = secrets.token_urlsafe(32)
        self._sessions[token] = user
        return token

    def lookup(self, token: str) -> AdminUser | None:
        return self._sessions.get(token)

    def revoke_user(self, user_id: AccountId) -> int:
        """Drop every session belonging to ``user_id``; returns how many."""
        stale = [t for t, u in list(self._sessions.items()) if str(u.id) == str(user_id)]
        for token in stale:
            self._sessions.pop(token, None)
        return len(stale)

    def clear(self) -> None:
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)
