"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class LoginResponse(BaseModel):
    """Returned after a successful login; the session itself travels in a cookie."""

    message: str = Field(default="Logged in successfully")
    role: str = Field(..., description="Role of the authenticated user")


class SessionUser(BaseModel):
    """Identity embedded in a session token (id, username, role)."""

    id: int | str
    username: str
    role: str


class MeResponse(BaseModel):
    """Response for GET /me."""

    user: SessionUser


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
