"""
Per-table change notifications.

Every successful write through the API publishes one event for the table it
touched. Subscribers (the dashboard relay in app.api.routes.changes) react by
re-querying the whole table, so an event carries only what changed, never the
row itself.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any, Literal

logger = logging.getLogger(__name__)

TABLES = ("registrations", "teams", "users")

ChangeEvent = Literal["INSERT", "UPDATE", "DELETE"]
ChangeCallback = Callable[[dict[str, Any]], None]


class ChangeFeed:
    """Publish/subscribe channel keyed by table name."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[ChangeCallback]] = {}
        self._lock = threading.Lock()

    def subscribe(self, table: str, callback: ChangeCallback) -> Callable[[], None]:
        """
        Register a callback for every change on ``table``.

        Returns a function that removes the subscription; calling it more than
        once is harmless.
        """
        if table not in TABLES:
            raise ValueError(f"Unknown table: {table}")
        with self._lock:
            self._subscribers.setdefault(table, []).append(callback)

        def unsubscribe() -> None:
            with self._lock:
                callbacks = self._subscribers.get(table, [])
                if callback in callbacks:
                    callbacks.remove(callback)
                if not callbacks:
                    self._subscribers.pop(table, None)

        return unsubscribe

    def subscriber_count(self, table: str) -> int:
        with self._lock:
            return len(self._subscribers.get(table, []))

    def publish(self, table: str, event: ChangeEvent, record_id: Any = None) -> int:
        """
        Notify subscribers of ``table``. Returns how many callbacks succeeded.

        A failing callback is logged and skipped.
        """
        with self._lock:
            callbacks = list(self._subscribers.get(table, []))

        message = {"table": table, "event": event, "id": record_id}
        delivered = 0
        for callback in callbacks:
            try:
                callback(message)
                delivered += 1
            except Exception as e:
                logger.error("Change callback failed for %s %s: %s", table, event, e)
        return delivered


change_feed = ChangeFeed()


def get_change_feed() -> ChangeFeed:
    """Dependency that returns the process-wide change feed."""
    return change_feed
