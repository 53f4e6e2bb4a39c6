"""ORM model for staff accounts (auth and roles)."""

from sqlalchemy import Column, Integer, String

from app.models.base import Base


class User(Base):
    """
    Staff account for session login and role checks.

    role: 'Quản trị' (administrator) or 'Điều hành' (operator)
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="Điều hành")
