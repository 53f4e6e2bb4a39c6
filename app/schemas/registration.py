"""Schemas for tournament registrations submitted by players."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class RegistrationPayload(BaseModel):
    """
    Body for creating or editing a registration.

    Fields default to empty so that a missing field is reported the same way as
    a blank one. ``inGameName`` is accepted for older form clients.
    """

    model_config = ConfigDict(populate_by_name=True)

    team: str = Field(default="", description="Team name (preset or typed in)")
    in_game_name: str = Field(
        default="",
        validation_alias=AliasChoices("in_game_name", "inGameName"),
        description="Player's in-game name",
    )
    tanks: str = Field(default="", description="Free-text list of tanks")

    def cleaned(self) -> dict[str, str]:
        """Stripped field values keyed by column name."""
        return {
            "team": self.team.strip(),
            "in_game_name": self.in_game_name.strip(),
            "tanks": self.tanks.strip(),
        }

    def is_complete(self) -> bool:
        return all(self.cleaned().values())


class Registration(BaseModel):
    """Registration row as stored."""

    id: int | str
    team: str
    in_game_name: str
    tanks: str
    created_at: datetime | None = None


class TeamOptionsResponse(BaseModel):
    """Team choices for the public registration form."""

    presets: list[str]
    allow_custom: bool = Field(
        default=True,
        description="Whether a team name outside the presets may be typed in",
    )
