"""
Account rules on top of a profile store.

- Setup creates the first (master) account and is refused once any account
  exists.
- At least one master account must remain: the last master can be neither
  deleted nor demoted.
- Deleting an account ends its sessions.
"""

from __future__ import annotations

from forsaj.accounts.models import (
    AccountId,
    AdminRole,
    AdminUser,
    LoginRequest,
    LoginResponse,
    SetupRequest,
    UserUpsertRequest,
)
from forsaj.accounts.sessions import SessionRegistry
from forsaj.accounts.store import ProfileStore
from forsaj.observability.logging import get_logger
from forsaj.observability.telemetry import log_event
from forsaj.utils.errors import ValidationFailureError

logger = get_logger(__name__)


class AccountService:
    def __init__(self, store: ProfileStore, sessions: SessionRegistry | None = None) -> None:
        self.store = store
        self.sessions = sessions or SessionRegistry()

    async def needs_setup(self) -> bool:
        return not await self.store.has_users()

    async def setup(self, request: SetupRequest) -> AdminUser:
        """
        Create the master account on first run.

        Raises:
            ValidationFailureError: an account already exists
        """
        if await self.store.has_users():
            raise ValidationFailureError(
                "Setup already completed", "Quraşdırma artıq tamamlanıb"
            )
        user = await self.store.create_user(
            request.username, request.name, AdminRole.MASTER, request.password
        )
        log_event("accounts.setup", username=user.username)
        return user

    async def login(self, request: LoginRequest) -> LoginResponse | None:
        """Return a session for valid credentials, ``None`` otherwise."""
        username = request.username.strip().lower()
        user = await self.store.authenticate(username, request.password)
        if user is None:
            logger.info("Failed login for %s", username)
            return None
        token = self.sessions.issue(user)
        log_event("accounts.login", username=user.username, role=user.role)
        return LoginResponse(user=user, token=token)

    def session_user(self, token: str) -> AdminUser | None:
        return self.sessions.lookup(token)

    async def list_users(self) -> list[AdminUser]:
        return await self.store.list_users()

    async def _masters(self) -> list[AdminUser]:
        return [u for u in await self.store.list_users() if u.role == AdminRole.MASTER]

    async def save_user(self, request: UserUpsertRequest) -> AdminUser:
        """Create when ``request.id`` is empty, otherwise update in place."""
        if request.id is None:
            if not request.password:
                raise ValidationFailureError(
                    "Password is required for a new account", "Şifrə tələb olunur"
                )
            user = await self.store.create_user(
                request.username, request.name, request.role, request.password
            )
            log_event("accounts.created", username=user.username, role=user.role)
            return user

        if request.role != AdminRole.MASTER:
            masters = await self._masters()
            if [str(m.id) for m in masters] == [str(request.id)]:
                raise ValidationFailureError(
                    "Cannot demote the last master account",
                    "Sonuncu master hesabın rolu dəyişdirilə bilməz",
                )
        user = await self.store.update_user(
            request.id, request.username, request.name, request.role, request.password
        )
        log_event("accounts.updated", username=user.username, role=user.role)
        return user

    async def delete_user(self, user_id: AccountId) -> None:
        masters = await self._masters()
        if [str(m.id) for m in masters] == [str(user_id)]:
            raise ValidationFailureError(
                "Cannot delete the last master account",
                "Sonuncu master hesab silinə bilməz",
            )
        await self.store.delete_user(user_id)
        revoked = self.sessions.revoke_user(user_id)
        log_event("accounts.deleted", user_id=str(user_id), sessions_revoked=revoked)
