"""Cookie session login/logout and auth dependencies (get_current_user, require_admin)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import settings
from app.core.security import (
    ROLE_ADMINISTRATOR,
    InvalidCredentialError,
    issue_session_token,
    verify_session_token,
)
from app.core.store import StoreHandle, get_store
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MeResponse,
    MessageResponse,
    SessionUser,
)
from app.services.users import authenticate_user

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)


def _cookie_options() -> dict:
    return {
        "httponly": True,
        "samesite": "lax",
        "secure": settings.APP_ENV == "prod",
        "path": "/",
    }


def identify(token: str | None) -> SessionUser:
    """
    Resolve a raw session token to the user it carries.
    Raises 401 when there is no token and 403 when it does not verify.
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return verify_session_token(token)
    except InvalidCredentialError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=e.message,
        ) from e


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> SessionUser:
    """
    Dependency: require a valid session and return its user.

    The session cookie is checked first; a Bearer header is accepted for
    non-browser clients.
    """
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token and credentials is not None:
        token = credentials.credentials
    return identify(token)


def require_admin(
    current_user: Annotated[SessionUser, Depends(get_current_user)],
) -> SessionUser:
    """Dependency: require an authenticated Administrator. Raises 403 otherwise."""
    if current_user.role != ROLE_ADMINISTRATOR:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator access required",
        )
    return current_user


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    response: Response,
    store: Annotated[StoreHandle, Depends(get_store)],
) -> LoginResponse:
    """
    Authenticate with username and password.
    On success the session token is set as an HTTP-only cookie.
    """
    user = authenticate_user(store, body.username, body.password)
    if user is None:
        logger.warning("Failed login for %r", body.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password.",
        )
    token = issue_session_token(user)
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        max_age=settings.SESSION_EXPIRE_HOURS * 3600,
        **_cookie_options(),
    )
    logger.info("User %r logged in", user.username)
    return LoginResponse(role=user.role)


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    """Clear the session cookie. Always succeeds, with or without a session."""
    response.delete_cookie(settings.SESSION_COOKIE_NAME, **_cookie_options())
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=MeResponse)
def me(
    current_user: Annotated[SessionUser, Depends(get_current_user)],
) -> MeResponse:
    """Return the identity carried by the current session."""
    return MeResponse(user=current_user)
