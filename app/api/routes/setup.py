"""First-run setup: create an administrator account."""

import logging
import threading
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials

from app.api.routes.auth import get_current_user, security
from app.api.routes.users import add_user
from app.core.security import ROLE_ADMINISTRATOR
from app.core.store import StoreHandle, get_store
from app.schemas.user import SetupRequest, SetupStatus, UserListItem
from app.services.change_feed import ChangeFeed, get_change_feed
from app.services.users import count_users

logger = logging.getLogger(__name__)
router = APIRouter()

# Serializes the empty-table check with the insert that follows it.
_setup_lock = threading.Lock()


@router.get("", response_model=SetupStatus)
def get_setup_status(
    store: Annotated[StoreHandle, Depends(get_store)],
) -> SetupStatus:
    """Report whether any account exists yet."""
    return SetupStatus(has_users=count_users(store) > 0)


@router.post("", response_model=UserListItem, status_code=status.HTTP_201_CREATED)
def post_setup(
    body: SetupRequest,
    request: Request,
    store: Annotated[StoreHandle, Depends(get_store)],
    feed: Annotated[ChangeFeed, Depends(get_change_feed)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> UserListItem:
    """
    Create an administrator.

    Open to anyone while there are no users at all; afterwards only an
    authenticated administrator may add more.
    """
    with _setup_lock:
        if count_users(store) > 0:
            current_user = get_current_user(request, credentials)
            if current_user.role != ROLE_ADMINISTRATOR:
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="Administrator access required",
                )
        else:
            logger.info("No users found; creating first administrator %r", body.username)
        return add_user(store, feed, body.username, body.password, ROLE_ADMINISTRATOR)
