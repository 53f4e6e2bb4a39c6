"""Pydantic request/response schemas."""

from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MeResponse,
    MessageResponse,
    SessionUser,
)
from app.schemas.health import HealthResponse
from app.schemas.registration import (
    Registration,
    RegistrationPayload,
    TeamOptionsResponse,
)
from app.schemas.team import Team, TeamPayload
from app.schemas.user import (
    RoleName,
    SetupRequest,
    SetupStatus,
    UserCreate,
    UserListItem,
    UserUpdate,
)

__all__ = [
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MeResponse",
    "MessageResponse",
    "Registration",
    "RegistrationPayload",
    "RoleName",
    "SessionUser",
    "SetupRequest",
    "SetupStatus",
    "Team",
    "TeamOptionsResponse",
    "TeamPayload",
    "UserCreate",
    "UserListItem",
    "UserUpdate",
]
