"""
Admin account backends.

Two implementations of the same async interface:

- ``LocalProfileStore`` keeps accounts in ``users.json`` next to the site
  content, with salted PBKDF2 password hashes.
- ``RemoteProfileStore`` talks to a hosted auth service (GoTrue ``/auth/v1``)
  and its ``profiles`` table (PostgREST ``/rest/v1``). Usernames are mapped
  to virtual e-mail addresses because the auth service only knows e-mails.

Store methods do raw persistence only; role and first-run rules live in
``forsaj.accounts.service``.
"""

from __future__ import annotations

import hashlib
import secrets
from pathlib import Path
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from forsaj.accounts.models import AccountId, AdminRole, AdminUser, StoredUser
from forsaj.config import (
    PASSWORD_HASH_ITERATIONS,
    UPSTREAM_TIMEOUT_SECONDS,
    VIRTUAL_EMAIL_DOMAIN,
)
from forsaj.observability.logging import get_logger
from forsaj.observability.telemetry import counter
from forsaj.storage.json_store import read_json, write_json
from forsaj.utils.errors import NotFoundError, UpstreamFailureError, ValidationFailureError

logger = get_logger(__name__)

_HASH_SCHEME = "pbkdf2_sha256"


def hash_password(password: str, *, iterations: int = PASSWORD_HASH_ITERATIONS) -> str:
    """Return ``pbkdf2_sha256$<iterations>$<salt>$<digest>``."""
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), bytes.fromhex(salt), iterations)
    return f"{_HASH_SCHEME}${iterations}${salt}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    try:
        scheme, iterations, salt, expected = encoded.split("$")
        rounds = int(iterations)
        salt_bytes = bytes.fromhex(salt)
    except ValueError:
        return False
    if scheme != _HASH_SCHEME:
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt_bytes, rounds)
    return secrets.compare_digest(digest.hex(), expected)


def virtual_email(username: str) -> str:
    return f"{username}@{VIRTUAL_EMAIL_DOMAIN}"


class ProfileStore(Protocol):
    async def list_users(self) -> list[AdminUser]: ...

    async def has_users(self) -> bool: ...

    async def create_user(
        self, username: str, name: str, role: AdminRole, password: str
    ) -> AdminUser: ...

    async def update_user(
        self,
        user_id: AccountId,
        username: str,
        name: str,
        role: AdminRole,
        password: str | None = None,
    ) -> AdminUser: ...

    async def delete_user(self, user_id: AccountId) -> None: ...

    async def authenticate(self, username: str, password: str) -> AdminUser | None: ...


class LocalProfileStore:
    """Accounts in a JSON file on the local disk."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _load(self) -> list[StoredUser]:
        raw = read_json(self.path, default=[])
        if not isinstance(raw, list):
            raise ValidationFailureError(f"{self.path.name} does not hold a list")
        try:
            return [StoredUser.model_validate(item) for item in raw]
        except ValidationError as e:
            raise ValidationFailureError(f"Corrupt account record in {self.path.name}") from e

    def _save(self, users: list[StoredUser]) -> None:
        write_json(self.path, [user.model_dump(mode="json") for user in users])

    @staticmethod
    def _find(users: list[StoredUser], user_id: AccountId) -> StoredUser:
        for user in users:
            if str(user.id) == str(user_id):
                return user
        raise NotFoundError(f"User {user_id} not found", "İstifadəçi tapılmadı")

    @staticmethod
    def _check_unique(
        users: list[StoredUser], username: str, exclude: AccountId | None = None
    ) -> None:
        for user in users:
            if user.username == username and str(user.id) != str(exclude):
                raise ValidationFailureError(
                    f"Username {username!r} is taken", "Bu istifadəçi adı artıq mövcuddur"
                )

    async def list_users(self) -> list[AdminUser]:
        return [user.public() for user in self._load()]

    async def has_users(self) -> bool:
        return bool(self._load())

    async def create_user(
        self, username: str, name: str, role: AdminRole, password: str
    ) -> AdminUser:
        users = self._load()
        self._check_unique(users, username)
        next_id = max((int(u.id) for u in users if str(u.id).isdigit()), default=0) + 1
        user = StoredUser(
            id=next_id,
            username=username,
            name=name,
            role=role,
            password_hash=hash_password(password),
        )
        users.append(user)
        self._save(users)
        logger.info("Created local admin user %s (%s)", username, user.role)
        return user.public()

    async def update_user(
        self,
        user_id: AccountId,
        username: str,
        name: str,
        role: AdminRole,
        password: str | None = None,
    ) -> AdminUser:
        users = self._load()
        user = self._find(users, user_id)
        self._check_unique(users, username, exclude=user.id)
        user.username = username
        user.name = name
        user.role = AdminRole(role).value
        if password:
            user.password_hash = hash_password(password)
        self._save(users)
        return user.public()

    async def delete_user(self, user_id: AccountId) -> None:
        users = self._load()
        user = self._find(users, user_id)
        self._save([u for u in users if u is not user])
        logger.info("Deleted local admin user %s", user.username)

    async def authenticate(self, username: str, password: str) -> AdminUser | None:
        for user in self._load():
            if user.username == username:
                if verify_password(password, user.password_hash):
                    return user.public()
                break
        counter("accounts.login_failures")
        return None


def _upstream_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("msg", "message", "error_description", "error"):
            if body.get(key):
                return str(body[key])
    return f"HTTP {response.status_code}"


class RemoteProfileStore:
    """
    Accounts held by a hosted auth service plus a ``profiles`` table.

    Every call is a single attempt; failures surface as UpstreamFailureError
    carrying the upstream message.
    """

    def __init__(
        self,
        base_url: str,
        service_key: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = UPSTREAM_TIMEOUT_SECONDS,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.service_key = service_key
        self.transport = transport
        self.timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "apikey": self.service_key,
                "Authorization": f"Bearer {self.service_key}",
            },
            timeout=self.timeout,
            transport=self.transport,
        )

    async def _request(
        self, method: str, url: str, *, ok_statuses: tuple[int, ...] = (), **kwargs: Any
    ) -> httpx.Response:
        async with self._client() as client:
            try:
                response = await client.request(method, url, **kwargs)
            except httpx.TimeoutException:
                logger.warning("Auth service timed out: %s %s", method, url)
                raise UpstreamFailureError("Auth service timed out") from None
            except httpx.RequestError as e:
                logger.error("Auth service request failed: %s", e)
                raise UpstreamFailureError(f"Auth service unreachable: {e}") from e

        if response.is_success or response.status_code in ok_statuses:
            return response
        message = _upstream_message(response)
        logger.warning("Auth service %s %s -> %s: %s", method, url, response.status_code, message)
        counter("accounts.upstream_errors")
        raise UpstreamFailureError(message)

    @staticmethod
    def _profile(row: dict) -> AdminUser:
        return AdminUser(
            id=row["id"],
            username=row.get("username", ""),
            name=row.get("name") or row.get("username", ""),
            role=row.get("role") or AdminRole.SECONDARY,
        )

    async def _fetch_profile(self, user_id: AccountId) -> AdminUser:
        response = await self._request(
            "GET",
            "/rest/v1/profiles",
            params={"id": f"eq.{user_id}", "select": "id,username,name,role"},
        )
        rows = response.json()
        if not rows:
            raise NotFoundError(f"Profile {user_id} not found", "İstifadəçi tapılmadı")
        return self._profile(rows[0])

    async def list_users(self) -> list[AdminUser]:
        response = await self._request(
            "GET", "/rest/v1/profiles", params={"select": "id,username,name,role"}
        )
        return [self._profile(row) for row in response.json()]

    async def has_users(self) -> bool:
        response = await self._request(
            "GET", "/rest/v1/profiles", params={"select": "id", "limit": "1"}
        )
        return bool(response.json())

    async def create_user(
        self, username: str, name: str, role: AdminRole, password: str
    ) -> AdminUser:
        role_value = AdminRole(role).value
        response = await self._request(
            "POST",
            "/auth/v1/admin/users",
            json={
                "email": virtual_email(username),
                "password": password,
                "email_confirm": True,
                "user_metadata": {"username": username, "name": name, "role": role_value},
            },
        )
        user_id = response.json().get("id")
        if not user_id:
            raise UpstreamFailureError("Auth service returned no user id")
        await self._request(
            "POST",
            "/rest/v1/profiles",
            json={"id": user_id, "username": username, "name": name, "role": role_value},
            headers={"Prefer": "resolution=merge-duplicates"},
        )
        logger.info("Created remote admin user %s (%s)", username, role_value)
        return AdminUser(id=user_id, username=username, name=name, role=role_value)

    async def update_user(
        self,
        user_id: AccountId,
        username: str,
        name: str,
        role: AdminRole,
        password: str | None = None,
    ) -> AdminUser:
        role_value = AdminRole(role).value
        attributes: dict[str, Any] = {
            "email": virtual_email(username),
            "user_metadata": {"username": username, "name": name, "role": role_value},
        }
        if password:
            attributes["password"] = password
        await self._request("PUT", f"/auth/v1/admin/users/{user_id}", json=attributes)
        await self._request(
            "PATCH",
            "/rest/v1/profiles",
            params={"id": f"eq.{user_id}"},
            json={"username": username, "name": name, "role": role_value},
        )
        return AdminUser(id=user_id, username=username, name=name, role=role_value)

    async def delete_user(self, user_id: AccountId) -> None:
        await self._request("DELETE", "/rest/v1/profiles", params={"id": f"eq.{user_id}"})
        await self._request("DELETE", f"/auth/v1/admin/users/{user_id}")

    async def authenticate(self, username: str, password: str) -> AdminUser | None:
        # 400 is how the token endpoint reports bad credentials
        response = await self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": virtual_email(username), "password": password},
            ok_statuses=(400,),
        )
        if response.status_code == 400:
            counter("accounts.login_failures")
            return None
        user_id = response.json().get("user", {}).get("id")
        if not user_id:
            raise UpstreamFailureError("Token response carried no user")
        return await self._fetch_profile(user_id)


__all__ = [
    "LocalProfileStore",
    "ProfileStore",
    "RemoteProfileStore",
    "hash_password",
    "verify_password",
    "virtual_email",
]
