"""Team rows. Registrations refer to teams by name only, so nothing here cascades."""

import logging
from typing import Any

from app.core.store import StoreError, StoreHandle, execute
from app.schemas.team import Team

logger = logging.getLogger(__name__)

TABLE = "teams"


class TeamNotFoundError(Exception):
    """Raised when a rename or delete matched no team."""

    def __init__(self, team_id: Any) -> None:
        self.team_id = team_id
        self.message = f"Team {team_id} not found"
        super().__init__(self.message)


def list_teams(store: StoreHandle) -> list[Team]:
    """All teams in creation order."""
    response = execute(store.table(TABLE).select("*").order("created_at"))
    return [Team.model_validate(row) for row in response.data or []]


def create_team(store: StoreHandle, name: str) -> Team:
    response = execute(store.table(TABLE).insert({"name": name}))
    if not response.data:
        raise StoreError("Data store returned no row for the new team")
    return Team.model_validate(response.data[0])


def rename_team(store: StoreHandle, team_id: Any, name: str) -> Team:
    response = execute(store.table(TABLE).update({"name": name}).eq("id", team_id))
    if not response.data:
        raise TeamNotFoundError(team_id)
    return Team.model_validate(response.data[0])


def delete_team(store: StoreHandle, team_id: Any) -> Team:
    response = execute(store.table(TABLE).delete().eq("id", team_id))
    if not response.data:
        raise TeamNotFoundError(team_id)
    deleted = Team.model_validate(response.data[0])
    logger.info("Team %s (%r) deleted", deleted.id, deleted.name)
    return deleted
