"""Shared handle to the hosted Supabase data store."""

import logging
import threading
from typing import Any, Callable

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Postgres error code returned by PostgREST on a unique constraint violation.
UNIQUE_VIOLATION = "23505"


class StoreError(Exception):
    """Raised when a call to the data store fails (network, constraint, permission)."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code
        super().__init__(message)


class StoreHandle:
    """
    Process-wide handle around the Supabase client.

    The client is built on first use; the lock keeps concurrent first calls
    from creating it twice. After that the handle is read-only.
    """

    def __init__(
        self,
        settings_factory: Callable[[], Settings] = get_settings,
        client_factory: Callable[..., Client] = create_client,
    ) -> None:
        self._settings_factory = settings_factory
        self._client_factory = client_factory
        self._client: Client | None = None
        self._lock = threading.Lock()

    @property
    def client(self) -> Client:
        if self._client is None:
            with self._lock:
                if self._client is None:
                    settings = self._settings_factory()
                    logger.info("Creating data store client for %s", settings.SUPABASE_URL)
                    self._client = self._client_factory(
                        settings.SUPABASE_URL,
                        settings.SUPABASE_KEY.get_secret_value(),
                    )
        return self._client

    def table(self, name: str) -> Any:
        """Start a query builder on the given table."""
        return self.client.table(name)


def execute(query: Any) -> Any:
    """
    Run a built query and return the provider response.

    Provider and transport failures surface as StoreError with the upstream
    message unchanged.
    """
    try:
        return query.execute()
    except APIError as e:
        logger.warning("Data store rejected request: code=%s message=%s", e.code, e.message)
        raise StoreError(e.message or str(e), code=e.code) from e
    except httpx.HTTPError as e:
        logger.error("Data store unreachable: %s", e)
        raise StoreError(str(e) or "Data store unreachable") from e


store = StoreHandle()


def get_store() -> StoreHandle:
    """Dependency that returns the shared store handle."""
    return store


def check_store_connected(handle: StoreHandle) -> bool:
    """Run a trivial query to verify the data store is reachable."""
    try:
        execute(handle.table("teams").select("id").limit(1))
        return True
    except StoreError:
        return False
