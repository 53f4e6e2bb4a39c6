"""Schemas for teams managed by administrators."""

from datetime import datetime

from pydantic import BaseModel, Field


class TeamPayload(BaseModel):
    """Body for creating or renaming a team."""

    name: str = Field(default="", max_length=255)


class Team(BaseModel):
    id: int | str
    name: str
    created_at: datetime | None = None
