"""Declarative Base for the ORM mirror of the hosted tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Shared metadata for users, teams and registrations; alembic migrates from it."""
