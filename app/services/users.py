"""Staff accounts: lookup for login, management by administrators, first-run setup."""

import logging
from typing import Any

from app.core.security import hash_password, verify_password
from app.core.store import UNIQUE_VIOLATION, StoreError, StoreHandle, execute
from app.schemas.auth import SessionUser
from app.schemas.user import UserListItem

logger = logging.getLogger(__name__)

TABLE = "users"
PUBLIC_COLUMNS = "id, username, role"


class DuplicateUsernameError(Exception):
    """Raised when the store rejects a new user because the username is taken."""

    def __init__(self, username: str) -> None:
        self.username = username
        self.message = "Username already exists"
        super().__init__(self.message)


class UserNotFoundError(Exception):
    """Raised when an update or delete matched no user."""

    def __init__(self, user_id: Any) -> None:
        self.user_id = user_id
        self.message = f"User {user_id} not found"
        super().__init__(self.message)


def authenticate_user(store: StoreHandle, username: str, password: str) -> SessionUser | None:
    """Return the identity for a matching username and password, or None."""
    response = execute(
        store.table(TABLE).select("*").eq("username", username).limit(1)
    )
    if not response.data:
        return None
    row = response.data[0]
    if not verify_password(password, row.get("password_hash")):
        return None
    return SessionUser(id=row["id"], username=row["username"], role=row["role"])


def count_users(store: StoreHandle) -> int:
    response = execute(store.table(TABLE).select("id", count="exact").limit(1))
    if response.count is not None:
        return response.count
    return len(response.data or [])


def list_users(store: StoreHandle) -> list[UserListItem]:
    """All users ordered by username, without password hashes."""
    response = execute(store.table(TABLE).select(PUBLIC_COLUMNS).order("username"))
    return [UserListItem.model_validate(row) for row in response.data or []]


def create_user(store: StoreHandle, username: str, password: str, role: str) -> UserListItem:
    """Insert a user with a bcrypt hash. Raises DuplicateUsernameError if the name is taken."""
    row = {
        "username": username,
        "password_hash": hash_password(password),
        "role": role,
    }
    try:
        response = execute(store.table(TABLE).insert(row))
    except StoreError as e:
        if e.code == UNIQUE_VIOLATION:
            raise DuplicateUsernameError(username) from e
        raise
    if not response.data:
        raise StoreError("Data store returned no row for the new user")
    created = UserListItem.model_validate(response.data[0])
    logger.info("User %r created with role %r", created.username, created.role)
    return created


def update_user(
    store: StoreHandle,
    user_id: Any,
    role: str | None = None,
    password: str | None = None,
) -> UserListItem:
    """Change role and/or password of one user."""
    changes: dict[str, str] = {}
    if role is not None:
        changes["role"] = role
    if password is not None:
        changes["password_hash"] = hash_password(password)
    if not changes:
        response = execute(
            store.table(TABLE).select(PUBLIC_COLUMNS).eq("id", user_id).limit(1)
        )
    else:
        response = execute(store.table(TABLE).update(changes).eq("id", user_id))
    if not response.data:
        raise UserNotFoundError(user_id)
    return UserListItem.model_validate(response.data[0])


def delete_user(store: StoreHandle, user_id: Any) -> UserListItem:
    response = execute(store.table(TABLE).delete().eq("id", user_id))
    if not response.data:
        raise UserNotFoundError(user_id)
    deleted = UserListItem.model_validate(response.data[0])
    logger.info("User %r deleted", deleted.username)
    return deleted
