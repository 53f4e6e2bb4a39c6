"""Registration rows: list, submit, edit, delete."""

import logging
from typing import Any

from app.core.store import StoreError, StoreHandle, execute
from app.schemas.registration import Registration

logger = logging.getLogger(__name__)

TABLE = "registrations"
SEARCH_FIELDS = ("team", "in_game_name", "tanks")


class RegistrationNotFoundError(Exception):
    """Raised when an update or delete matched no registration."""

    def __init__(self, registration_id: Any) -> None:
        self.registration_id = registration_id
        self.message = f"Registration {registration_id} not found"
        super().__init__(self.message)


def filter_registrations(
    registrations: list[Registration], search: str | None
) -> list[Registration]:
    """Keep registrations whose team, in-game name or tanks contain ``search`` (case-insensitive)."""
    if not search or not search.strip():
        return registrations
    needle = search.strip().lower()
    return [
        r
        for r in registrations
        if any(needle in (getattr(r, field) or "").lower() for field in SEARCH_FIELDS)
    ]


def list_registrations(store: StoreHandle, search: str | None = None) -> list[Registration]:
    """All registrations, newest first, optionally filtered."""
    response = execute(
        store.table(TABLE).select("*").order("created_at", desc=True)
    )
    rows = [Registration.model_validate(row) for row in response.data or []]
    return filter_registrations(rows, search)


def create_registration(store: StoreHandle, fields: dict[str, str]) -> Registration:
    """Insert a registration; ``fields`` must already be validated."""
    response = execute(store.table(TABLE).insert(fields))
    if not response.data:
        raise StoreError("Data store returned no row for the new registration")
    created = Registration.model_validate(response.data[0])
    logger.info("Registration %s created for team %r", created.id, created.team)
    return created


def update_registration(
    store: StoreHandle, registration_id: Any, fields: dict[str, str]
) -> Registration:
    """Overwrite team, in-game name and tanks of one registration."""
    response = execute(store.table(TABLE).update(fields).eq("id", registration_id))
    if not response.data:
        raise RegistrationNotFoundError(registration_id)
    return Registration.model_validate(response.data[0])


def delete_registration(store: StoreHandle, registration_id: Any) -> Registration:
    """Delete one registration by id and return the removed row."""
    response = execute(store.table(TABLE).delete().eq("id", registration_id))
    if not response.data:
        raise RegistrationNotFoundError(registration_id)
    return Registration.model_validate(response.data[0])
