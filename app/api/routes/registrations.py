"""Registration endpoints: public submission, staff review and edit, admin delete."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.routes.auth import get_current_user, require_admin
from app.core.config import settings
from app.core.store import StoreHandle, get_store
from app.schemas.auth import MessageResponse, SessionUser
from app.schemas.registration import (
    Registration,
    RegistrationPayload,
    TeamOptionsResponse,
)
from app.services.change_feed import ChangeFeed, get_change_feed
from app.services.registrations import (
    TABLE,
    RegistrationNotFoundError,
    create_registration,
    delete_registration,
    list_registrations,
    update_registration,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _validated_fields(body: RegistrationPayload) -> dict[str, str]:
    if not body.is_complete():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="All fields are required",
        )
    return body.cleaned()


@router.get("/team-options", response_model=TeamOptionsResponse)
def get_team_options() -> TeamOptionsResponse:
    """Preset team names for the public form; any other name may be typed in."""
    return TeamOptionsResponse(presets=settings.TEAM_PRESETS, allow_custom=True)


@router.post("", response_model=Registration, status_code=status.HTTP_201_CREATED)
def post_registration(
    body: RegistrationPayload,
    store: Annotated[StoreHandle, Depends(get_store)],
    feed: Annotated[ChangeFeed, Depends(get_change_feed)],
) -> Registration:
    """
    Submit a registration (public).

    team, in_game_name (or inGameName) and tanks are all required; blank
    values are rejected with 400 and nothing is stored.
    """
    fields = _validated_fields(body)
    created = create_registration(store, fields)
    feed.publish(TABLE, "INSERT", created.id)
    return created


@router.get("", response_model=list[Registration])
def get_registrations(
    store: Annotated[StoreHandle, Depends(get_store)],
    _user: Annotated[SessionUser, Depends(get_current_user)],
    search: Annotated[str | None, Query(max_length=255)] = None,
) -> list[Registration]:
    """All registrations, newest first. ``search`` filters on team, name and tanks."""
    return list_registrations(store, search)


@router.put("/{registration_id}", response_model=Registration)
def put_registration(
    registration_id: int,
    body: RegistrationPayload,
    store: Annotated[StoreHandle, Depends(get_store)],
    feed: Annotated[ChangeFeed, Depends(get_change_feed)],
    _user: Annotated[SessionUser, Depends(get_current_user)],
) -> Registration:
    """Edit a registration. Concurrent edits are last-write-wins."""
    fields = _validated_fields(body)
    try:
        updated = update_registration(store, registration_id, fields)
    except RegistrationNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    feed.publish(TABLE, "UPDATE", updated.id)
    return updated


@router.delete("/{registration_id}", response_model=MessageResponse)
def remove_registration(
    registration_id: int,
    store: Annotated[StoreHandle, Depends(get_store)],
    feed: Annotated[ChangeFeed, Depends(get_change_feed)],
    admin: Annotated[SessionUser, Depends(require_admin)],
) -> MessageResponse:
    """Delete a registration (Administrator only)."""
    try:
        deleted = delete_registration(store, registration_id)
    except RegistrationNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    logger.info("Registration %s deleted by %r", deleted.id, admin.username)
    feed.publish(TABLE, "DELETE", deleted.id)
    return MessageResponse(message="Registration deleted successfully")
