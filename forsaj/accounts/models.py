"""Admin account models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from forsaj.utils.validators import validate_password, validate_username

AccountId = int | str


class AdminRole(str, Enum):
    MASTER = "master"  # Full access, manages other accounts
    SECONDARY = "secondary"  # Content editing only


class AdminUser(BaseModel):
    """Public view of an admin account (never carries a password)."""

    model_config = ConfigDict(use_enum_values=True)

    id: AccountId
    username: str
    name: str
    role: AdminRole = AdminRole.SECONDARY


class StoredUser(AdminUser):
    """Local store record: public fields plus the password hash."""

    password_hash: str

    def public(self) -> AdminUser:
        return AdminUser(id=self.id, username=self.username, name=self.name, role=self.role)


class UserUpsertRequest(BaseModel):
    """Create (no id) or update (with id) an admin account."""

    id: AccountId | None = None
    username: str
    name: str = Field(min_length=1, max_length=100)
    role: AdminRole = AdminRole.SECONDARY
    password: str | None = None

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str) -> str:
        return validate_username(v)

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str | None) -> str | None:
        if v is None or v == "":
            return None
        return validate_password(v)


class SetupRequest(BaseModel):
    """First-run creation of the master account."""

    username: str
    name: str = Field(min_length=1, max_length=100)
    password: str

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str) -> str:
        return validate_username(v)

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        return validate_password(v)


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=256)


class LoginResponse(BaseModel):
    success: bool = True
    user: AdminUser
    token: str
