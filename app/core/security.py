"""Password hashing and session token issue/verification."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt
from pydantic import ValidationError

from app.core.config import settings
from app.schemas.auth import SessionUser

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Role values as stored in the users table.
ROLE_ADMINISTRATOR = "Quản trị"
ROLE_OPERATOR = "Điều hành"
ROLES = (ROLE_ADMINISTRATOR, ROLE_OPERATOR)

# Min/max lengths for username and password on account creation.
USERNAME_MIN_LEN = 4
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

# Claims every session token must carry.
REQUIRED_CLAIMS = ("id", "username", "role", "exp", "iat")


class InvalidCredentialError(Exception):
    """Raised when a session token fails signature, expiry or payload checks."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str | None) -> bool:
    """Verify a plain password against a stored hash."""
    if not hashed:
        return False
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def issue_session_token(user: SessionUser, issued_at: datetime | None = None) -> str:
    """Create a signed session token embedding id, username and role."""
    now = issued_at or datetime.now(UTC)
    expire = now + timedelta(hours=settings.SESSION_EXPIRE_HOURS)
    payload: dict[str, Any] = {
        "sub": str(user.id),
        "id": user.id,
        "username": user.username,
        "role": user.role,
        "exp": expire,
        "iat": now,
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def verify_session_token(token: str) -> SessionUser:
    """
    Decode and validate a session token; return the embedded identity.
    Raises InvalidCredentialError on bad signature, expiry or missing claims.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": list(REQUIRED_CLAIMS)},
        )
    except jwt.ExpiredSignatureError as e:
        raise InvalidCredentialError("Session expired") from e
    except jwt.PyJWTError as e:
        raise InvalidCredentialError("Invalid session token") from e
    try:
        return SessionUser(
            id=payload["id"],
            username=payload["username"],
            role=payload["role"],
        )
    except ValidationError as e:
        raise InvalidCredentialError("Invalid session token payload") from e
