"""Unit tests for the local profile store, sessions and account rules"""

from __future__ import annotations

import asyncio
import json

import pytest

from forsaj.accounts.models import (
    AdminRole,
    AdminUser,
    LoginRequest,
    SetupRequest,
    UserUpsertRequest,
)
from forsaj.accounts.service import AccountService
from forsaj.accounts.sessions import SessionRegistry
from forsaj.accounts.store import LocalProfileStore, hash_password, verify_password
from forsaj.utils.errors import NotFoundError, ValidationFailureError


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def store(tmp_path) -> LocalProfileStore:
    return LocalProfileStore(tmp_path / "users.json")


@pytest.fixture
def accounts(store) -> AccountService:
    return AccountService(store)


def _setup_master(accounts):
    return run(accounts.setup(SetupRequest(username="boss", name="Boss", password="secret1")))


def test_password_hash_round_trip():
    encoded = hash_password("pa55word", iterations=1000)

    assert encoded.startswith("pbkdf2_sha256$1000$")
    assert verify_password("pa55word", encoded)
    assert not verify_password("wrong", encoded)
    assert not verify_password("pa55word", "garbage")


def test_users_file_never_stores_plain_passwords(store, tmp_path):
    run(store.create_user("editor", "Editor", AdminRole.SECONDARY, "plaintext"))

    raw = (tmp_path / "users.json").read_text()
    assert "plaintext" not in raw
    assert json.loads(raw)[0]["role"] == "secondary"


def test_setup_only_once(accounts):
    assert run(accounts.needs_setup())

    user = _setup_master(accounts)

    assert user.role == "master"
    assert not run(accounts.needs_setup())
    with pytest.raises(ValidationFailureError):
        _setup_master(accounts)


def test_login_issues_session_token(accounts):
    _setup_master(accounts)

    response = run(accounts.login(LoginRequest(username="BOSS", password="secret1")))

    assert response.user.username == "boss"
    assert accounts.session_user(response.token).username == "boss"


def test_login_rejects_bad_credentials(accounts):
    _setup_master(accounts)

    assert run(accounts.login(LoginRequest(username="boss", password="nope"))) is None
    assert run(accounts.login(LoginRequest(username="ghost", password="secret1"))) is None


def test_create_requires_password(accounts):
    with pytest.raises(ValidationFailureError):
        run(accounts.save_user(UserUpsertRequest(username="editor", name="Ed")))


def test_duplicate_username_rejected(accounts):
    _setup_master(accounts)

    with pytest.raises(ValidationFailureError):
        run(accounts.save_user(UserUpsertRequest(username="boss", name="X", password="secret2")))


def test_update_keeps_password_when_omitted(accounts):
    _setup_master(accounts)
    editor = run(
        accounts.save_user(UserUpsertRequest(username="editor", name="Ed", password="secret2"))
    )

    run(accounts.save_user(UserUpsertRequest(id=editor.id, username="editor", name="Edward")))

    users = {u.username: u for u in run(accounts.list_users())}
    assert users["editor"].name == "Edward"
    assert run(accounts.login(LoginRequest(username="editor", password="secret2"))) is not None


def test_last_master_cannot_be_deleted_or_demoted(accounts):
    master = _setup_master(accounts)

    with pytest.raises(ValidationFailureError):
        run(accounts.delete_user(master.id))
    with pytest.raises(ValidationFailureError):
        run(
            accounts.save_user(
                UserUpsertRequest(id=master.id, username="boss", name="Boss", role="secondary")
            )
        )


def test_delete_user_ends_sessions(accounts):
    _setup_master(accounts)
    run(accounts.save_user(UserUpsertRequest(username="editor", name="Ed", password="secret2")))
    session = run(accounts.login(LoginRequest(username="editor", password="secret2")))

    run(accounts.delete_user(session.user.id))

    assert accounts.session_user(session.token) is None
    assert [u.username for u in run(accounts.list_users())] == ["boss"]


def test_delete_unknown_user(accounts):
    _setup_master(accounts)
    run(
        accounts.save_user(
            UserUpsertRequest(username="second", name="S", role="master", password="secret2")
        )
    )

    with pytest.raises(NotFoundError):
        run(accounts.delete_user(999))


def test_session_registry_revoke_user():
    sessions = SessionRegistry()
    first = sessions.issue(AdminUser(id=1, username="a", name="A"))
    sessions.issue(AdminUser(id=1, username="a", name="A"))
    other = sessions.issue(AdminUser(id=2, username="b", name="B"))

    assert sessions.revoke_user("1") == 2
    assert sessions.lookup(first) is None
    assert sessions.lookup(other).username == "b"
    assert len(sessions) == 1
