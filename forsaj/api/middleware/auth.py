"""Authentication for the admin API

State-changing endpoints require ``Authorization: Bearer <token>`` where the
token is either the configured admin API key or a live login session token.
When no API key is configured, access is allowed (development mode).
"""

from __future__ import annotations

import secrets

from fastapi import Header, HTTPException, Request, status

from forsaj.accounts.service import AccountService
from forsaj.observability.logging import get_logger

logger = get_logger(__name__)


class APIKeyAuth:
    """API key plus session-token authentication for admin endpoints."""

    def __init__(self, api_key: str | None, accounts: AccountService | None = None):
        self.api_key = api_key
        self.accounts = accounts
        if not self.api_key:
            logger.warning("FORSAJ_ADMIN_API_KEY not set - admin endpoints are unprotected!")

    def verify(self, authorization: str | None) -> bool:
        """
        Verify the bearer token from the Authorization header.

        Raises:
            HTTPException: 401 when missing or malformed, 403 when not recognized
        """
        if not self.api_key:
            return True

        if not authorization:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Missing authorization header",
                headers={"WWW-Authenticate": "Bearer"},
            )

        try:
            scheme, token = authorization.split()
            if scheme.lower() != "bearer":
                raise ValueError("Invalid authentication scheme")
        except ValueError as e:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid authorization header format. Expected: Bearer {token}",
                headers={"WWW-Authenticate": "Bearer"},
            ) from e

        if secrets.compare_digest(token, self.api_key):
            return True
        if self.accounts is not None and self.accounts.session_user(token) is not None:
            return True

        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid API key or session",
        )


def require_admin_auth(request: Request, authorization: str | None = Header(None)) -> bool:
    """
    Dependency for endpoints that require admin authentication.

    Usage:
        @router.post("/api/endpoint")
        async def endpoint(authenticated: bool = Depends(require_admin_auth)):
            ...
    """
    auth: APIKeyAuth = request.app.state.auth
    return auth.verify(authorization)
