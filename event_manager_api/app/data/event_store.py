"""
Storage collaborators for events.

``EventStore`` is the interface the service layer depends on.  Two
implementations are provided: ``SQLiteEventStore`` (the default,
backed by the ``core.db`` helpers) and ``InMemoryEventStore`` (handy
for tests and throwaway demos).  Both return events as plain dicts
with the keys ``id``, ``title``, ``description``, ``date`` and
``image`` and both keep insertion order when listing.

Every failure is raised as ``StorageError``; a missing id raises the
``EventNotFoundError`` subclass.
"""

import logging
import sqlite3
import uuid
from typing import Any, Dict, List, Mapping, Optional, Protocol

from event_manager_api.app.core.config import settings
from event_manager_api.app.core.db import get_connection, init_db
from event_manager_api.app.core.errors import EventNotFoundError, StorageError

logger = logging.getLogger(__name__)

EVENT_FIELDS = ("title", "description", "date", "image")


class EventStore(Protocol):
    def get_all(self) -> List[Dict[str, Any]]: ...

    def get(self, event_id: str) -> Dict[str, Any]: ...

    def add(self, data: Mapping[str, Any]) -> Dict[str, Any]: ...

    def replace(self, event_id: str, data: Mapping[str, Any]) -> Dict[str, Any]: ...

    def remove(self, event_id: str) -> None: ...


def generate_id() -> str:
    return uuid.uuid4().hex


def _event_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {name: data.get(name) for name in EVENT_FIELDS}


class InMemoryEventStore:
    """Keeps events in a dict; Python dicts preserve insertion order."""

    def __init__(self) -> None:
        self._events: Dict[str, Dict[str, Any]] = {}

    def get_all(self) -> List[Dict[str, Any]]:
        return [dict(event) for event in self._events.values()]

    def get(self, event_id: str) -> Dict[str, Any]:
        try:
            return dict(self._events[event_id])
        except KeyError:
            raise EventNotFoundError(event_id) from None

    def add(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        event = {"id": generate_id(), **_event_fields(data)}
        self._events[event["id"]] = event
        return dict(event)

    def replace(self, event_id: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        if event_id not in self._events:
            raise EventNotFoundError(event_id)
        event = {"id": event_id, **_event_fields(data)}
        self._events[event_id] = event
        return dict(event)

    def remove(self, event_id: str) -> None:
        if self._events.pop(event_id, None) is None:
            raise EventNotFoundError(event_id)


class SQLiteEventStore:
    """Event store backed by the ``events`` table.

    A new connection is opened for every call, matching the rest of the
    ``core.db`` helpers.  ``sqlite3`` errors are re-raised as
    ``StorageError`` so the API layer only has to know one failure type.
    """

    _COLUMNS = "id, title, description, date, image"

    def __init__(self, database_url: Optional[str] = None) -> None:
        self.database_url = database_url

    def _connect(self) -> sqlite3.Connection:
        try:
            return get_connection(self.database_url)
        except sqlite3.Error as exc:
            raise StorageError(f"Could not open events database: {exc}") from exc

    @staticmethod
    def _row_to_event(row: sqlite3.Row) -> Dict[str, Any]:
        return {key: row[key] for key in row.keys()}

    def get_all(self) -> List[Dict[str, Any]]:
        conn = self._connect()
        try:
            rows = conn.execute(
                f"SELECT {self._COLUMNS} FROM events ORDER BY rowid"
            ).fetchall()
            return [self._row_to_event(row) for row in rows]
        except sqlite3.Error as exc:
            raise StorageError(f"Could not read events: {exc}") from exc
        finally:
            conn.close()

    def get(self, event_id: str) -> Dict[str, Any]:
        conn = self._connect()
        try:
            row = conn.execute(
                f"SELECT {self._COLUMNS} FROM events WHERE id = ?",
                (event_id,),
            ).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(f"Could not read event {event_id}: {exc}") from exc
        finally:
            conn.close()
        if row is None:
            raise EventNotFoundError(event_id)
        return self._row_to_event(row)

    def add(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        event = {"id": generate_id(), **_event_fields(data)}
        conn = self._connect()
        try:
            conn.execute(
                """
                INSERT INTO events (id, title, description, date, image)
                VALUES (?, ?, ?, ?, ?)
                """,
                (event["id"], event["title"], event["description"], event["date"], event["image"]),
            )
            conn.commit()
        except sqlite3.Error as exc:
            raise StorageError(f"Could not add event: {exc}") from exc
        finally:
            conn.close()
        return event

    def replace(self, event_id: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        event = {"id": event_id, **_event_fields(data)}
        conn = self._connect()
        try:
            cursor = conn.execute(
                """
                UPDATE events
                SET title = ?, description = ?, date = ?, image = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (event["title"], event["description"], event["date"], event["image"], event_id),
            )
            updated = cursor.rowcount
            conn.commit()
        except sqlite3.Error as exc:
            raise StorageError(f"Could not update event {event_id}: {exc}") from exc
        finally:
            conn.close()
        if updated == 0:
            raise EventNotFoundError(event_id)
        return event

    def remove(self, event_id: str) -> None:
        conn = self._connect()
        try:
            cursor = conn.execute("DELETE FROM events WHERE id = ?", (event_id,))
            deleted = cursor.rowcount
            conn.commit()
        except sqlite3.Error as exc:
            raise StorageError(f"Could not delete event {event_id}: {exc}") from exc
        finally:
            conn.close()
        if deleted == 0:
            raise EventNotFoundError(event_id)


_memory_store: Optional[InMemoryEventStore] = None


def create_event_store(kind: Optional[str] = None) -> EventStore:
    """Build the store selected by ``settings.event_store``.

    The in-memory store is a process-wide singleton so that data
    survives between requests.
    """
    global _memory_store
    kind = (kind or settings.event_store).lower()
    if kind == "memory":
        if _memory_store is None:
            _memory_store = InMemoryEventStore()
        return _memory_store
    if kind == "sqlite":
        return SQLiteEventStore()
    raise ValueError(f"Unknown EVENT_STORE {kind!r}; expected 'sqlite' or 'memory'")


def init_event_store(kind: Optional[str] = None) -> None:
    """Prepare the configured store at application startup."""
    kind = (kind or settings.event_store).lower()
    if kind == "sqlite":
        init_db()
        logger.info("Events database ready")
    else:
        logger.info("Using %s event store", kind)


def get_event_store() -> EventStore:
    """FastAPI dependency returning the configured store."""
    return create_event_store()
