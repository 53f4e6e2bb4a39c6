"""SQLAlchemy ORM models describing the hosted tables (used by alembic)."""

from app.models.base import Base
from app.models.registration import Registration
from app.models.team import Team
from app.models.user import User

__all__ = ["Base", "Registration", "Team", "User"]
