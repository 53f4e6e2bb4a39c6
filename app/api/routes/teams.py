"""Team management. Staff may list teams; only administrators change them."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.routes.auth import get_current_user, require_admin
from app.core.store import StoreHandle, get_store
from app.schemas.auth import MessageResponse, SessionUser
from app.schemas.team import Team, TeamPayload
from app.services.change_feed import ChangeFeed, get_change_feed
from app.services.teams import (
    TABLE,
    TeamNotFoundError,
    create_team,
    delete_team,
    list_teams,
    rename_team,
)

router = APIRouter()


def _validated_name(body: TeamPayload) -> str:
    name = body.name.strip()
    if not name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Team name is required",
        )
    return name


@router.get("", response_model=list[Team])
def get_teams(
    store: Annotated[StoreHandle, Depends(get_store)],
    _user: Annotated[SessionUser, Depends(get_current_user)],
) -> list[Team]:
    return list_teams(store)


@router.post("", response_model=Team, status_code=status.HTTP_201_CREATED)
def post_team(
    body: TeamPayload,
    store: Annotated[StoreHandle, Depends(get_store)],
    feed: Annotated[ChangeFeed, Depends(get_change_feed)],
    _admin: Annotated[SessionUser, Depends(require_admin)],
) -> Team:
    """Add a team. Names are not required to be unique."""
    created = create_team(store, _validated_name(body))
    feed.publish(TABLE, "INSERT", created.id)
    return created


@router.put("/{team_id}", response_model=Team)
def put_team(
    team_id: int,
    body: TeamPayload,
    store: Annotated[StoreHandle, Depends(get_store)],
    feed: Annotated[ChangeFeed, Depends(get_change_feed)],
    _admin: Annotated[SessionUser, Depends(require_admin)],
) -> Team:
    """
    Rename a team.

    Registrations keep the team name they were submitted with; after a rename
    they no longer match this team.
    """
    try:
        renamed = rename_team(store, team_id, _validated_name(body))
    except TeamNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    feed.publish(TABLE, "UPDATE", renamed.id)
    return renamed


@router.delete("/{team_id}", response_model=MessageResponse)
def remove_team(
    team_id: int,
    store: Annotated[StoreHandle, Depends(get_store)],
    feed: Annotated[ChangeFeed, Depends(get_change_feed)],
    _admin: Annotated[SessionUser, Depends(require_admin)],
) -> MessageResponse:
    try:
        deleted = delete_team(store, team_id)
    except TeamNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    feed.publish(TABLE, "DELETE", deleted.id)
    return MessageResponse(message="Team deleted successfully")
