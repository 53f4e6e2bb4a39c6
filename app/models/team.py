"""ORM model for tournament teams."""

from sqlalchemy import Column, DateTime, Integer, String, func

from app.models.base import Base


class Team(Base):
    """
    Team created by an administrator.

    Names are deliberately not unique; registrations match teams by name only.
    """

    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
