"""Core app configuration, data store handle and session security."""

from app.core.config import get_settings, settings
from app.core.store import StoreError, StoreHandle, get_store

__all__ = ["get_settings", "settings", "StoreError", "StoreHandle", "get_store"]
