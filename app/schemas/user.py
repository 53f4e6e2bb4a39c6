"""Schemas for staff accounts (user management and first-run setup)."""

from typing import Literal

from pydantic import BaseModel, Field

# Mirrors app.core.security.ROLES; kept literal so the OpenAPI schema lists them.
RoleName = Literal["Quản trị", "Điều hành"]


class UserCreate(BaseModel):
    """Body for POST /users."""

    username: str = Field(..., max_length=255)
    password: str = Field(..., max_length=128)
    role: RoleName = "Điều hành"


class UserUpdate(BaseModel):
    """Body for PUT /users/{id}; omitted fields are left unchanged."""

    role: RoleName | None = None
    password: str | None = Field(default=None, max_length=128)


class UserListItem(BaseModel):
    """User entry for admin list (no password)."""

    id: int | str
    username: str
    role: str


class SetupRequest(BaseModel):
    """Credentials for a new administrator created through setup."""

    username: str = Field(..., max_length=255)
    password: str = Field(..., max_length=128)


class SetupStatus(BaseModel):
    """Whether any account exists yet."""

    has_users: bool
