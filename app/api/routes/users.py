"""Staff account management (Administrator only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.routes.auth import require_admin
from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from app.core.store import StoreHandle, get_store
from app.schemas.auth import MessageResponse, SessionUser
from app.schemas.user import UserCreate, UserListItem, UserUpdate
from app.services.change_feed import ChangeFeed, get_change_feed
from app.services.users import (
    TABLE,
    DuplicateUsernameError,
    UserNotFoundError,
    create_user,
    delete_user,
    list_users,
    update_user,
)

router = APIRouter()


def validate_username(username: str) -> str:
    username = username.strip()
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Username must be {USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} characters.",
        )
    return username


def validate_password(password: str) -> str:
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
        )
    return password


def add_user(store: StoreHandle, feed: ChangeFeed, username: str, password: str, role: str) -> UserListItem:
    """Validate, create and announce a new user; maps a taken username to 409."""
    username = validate_username(username)
    password = validate_password(password)
    try:
        created = create_user(store, username, password, role)
    except DuplicateUsernameError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    feed.publish(TABLE, "INSERT", created.id)
    return created


@router.get("", response_model=list[UserListItem])
def get_users(
    store: Annotated[StoreHandle, Depends(get_store)],
    _admin: Annotated[SessionUser, Depends(require_admin)],
) -> list[UserListItem]:
    """List all users ordered by username (no password hashes)."""
    return list_users(store)


@router.post("", response_model=UserListItem, status_code=status.HTTP_201_CREATED)
def post_user(
    body: UserCreate,
    store: Annotated[StoreHandle, Depends(get_store)],
    feed: Annotated[ChangeFeed, Depends(get_change_feed)],
    _admin: Annotated[SessionUser, Depends(require_admin)],
) -> UserListItem:
    return add_user(store, feed, body.username, body.password, body.role)


@router.put("/{user_id}", response_model=UserListItem)
def put_user(
    user_id: int,
    body: UserUpdate,
    store: Annotated[StoreHandle, Depends(get_store)],
    feed: Annotated[ChangeFeed, Depends(get_change_feed)],
    _admin: Annotated[SessionUser, Depends(require_admin)],
) -> UserListItem:
    """Change a user's role and/or password."""
    password = validate_password(body.password) if body.password is not None else None
    try:
        updated = update_user(store, user_id, role=body.role, password=password)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    feed.publish(TABLE, "UPDATE", updated.id)
    return updated


@router.delete("/{user_id}", response_model=MessageResponse)
def remove_user(
    user_id: int,
    store: Annotated[StoreHandle, Depends(get_store)],
    feed: Annotated[ChangeFeed, Depends(get_change_feed)],
    _admin: Annotated[SessionUser, Depends(require_admin)],
) -> MessageResponse:
    try:
        deleted = delete_user(store, user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    feed.publish(TABLE, "DELETE", deleted.id)
    return MessageResponse(message="User deleted successfully")
