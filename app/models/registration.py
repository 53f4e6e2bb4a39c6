"""ORM model for player registrations."""

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from app.models.base import Base


class Registration(Base):
    """
    One player's entry: team name as typed or picked, in-game name, tanks.

    ``team`` is free text, not a foreign key to teams.
    """

    __tablename__ = "registrations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    team = Column(String(255), nullable=False, index=True)
    in_game_name = Column(String(255), nullable=False)
    tanks = Column(Text, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
