"""Admin account endpoints: first-run setup, login and user management."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from forsaj.accounts.models import (
    AdminUser,
    LoginRequest,
    LoginResponse,
    SetupRequest,
    UserUpsertRequest,
)
from forsaj.accounts.service import AccountService
from forsaj.api.dependencies import get_account_service
from forsaj.api.middleware.auth import require_admin_auth
from forsaj.observability.logging import get_logger

router = APIRouter(prefix="/api", tags=["users"])
logger = get_logger(__name__)


@router.get("/check-setup")
async def check_setup(accounts: AccountService = Depends(get_account_service)) -> dict[str, bool]:
    return {"needsSetup": await accounts.needs_setup()}


@router.post("/setup")
async def setup(
    request: SetupRequest,
    accounts: AccountService = Depends(get_account_service),
) -> dict[str, Any]:
    """Create the master account. Refused once any account exists."""
    user = await accounts.setup(request)
    return {"success": True, "user": user.model_dump()}


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
) -> LoginResponse:
    response = await accounts.login(request)
    if response is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="İstifadəçi adı və ya şifrə yanlışdır",
        )
    return response


@router.get("/users", response_model=list[AdminUser])
async def list_users(
    accounts: AccountService = Depends(get_account_service),
    authenticated: bool = Depends(require_admin_auth),
) -> list[AdminUser]:
    return await accounts.list_users()


@router.post("/users")
async def save_user(
    request: UserUpsertRequest,
    accounts: AccountService = Depends(get_account_service),
    authenticated: bool = Depends(require_admin_auth),
) -> dict[str, Any]:
    """Create a user (no ``id``) or update an existing one."""
    user = await accounts.save_user(request)
    return {"success": True, "user": user.model_dump()}


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: str,
    accounts: AccountService = Depends(get_account_service),
    authenticated: bool = Depends(require_admin_auth),
) -> dict[str, bool]:
    await accounts.delete_user(user_id)
    return {"success": True}
