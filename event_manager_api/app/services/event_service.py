"""
Business logic for events.

``EventService`` validates incoming event data and delegates storage
to an ``EventStore``.  Create and update run every field check before
touching the store and report all failures together; nothing is
written when any field is invalid.  Storage failures propagate
unchanged as ``StorageError``.
"""

import logging
from typing import Any, List, Mapping

from event_manager_api.app.core.errors import EventValidationError
from event_manager_api.app.data.event_store import EventStore
from event_manager_api.app.schemas.event import EventRead
from event_manager_api.app.util.validation import validate_event_data

logger = logging.getLogger(__name__)


class EventService:
    """Service for managing events on top of an ``EventStore``."""

    def __init__(self, store: EventStore) -> None:
        self.store = store

    async def list_events(self) -> List[EventRead]:
        """Return every stored event in insertion order."""
        return [EventRead(**event) for event in self.store.get_all()]

    async def get_event(self, event_id: str) -> EventRead:
        """Retrieve a single event by ID.

        Raises ``EventNotFoundError`` (a ``StorageError``) if the store
        has no such event.
        """
        return EventRead(**self.store.get(event_id))

    async def create_event(self, data: Mapping[str, Any]) -> EventRead:
        """Validate ``data`` and store it as a new event.

        The store assigns the identifier; the returned event carries it.
        """
        errors = validate_event_data(data)
        if errors:
            raise EventValidationError(
                "Adding the event failed due to validation errors.", errors
            )
        event = self.store.add(data)
        logger.info("Created event %s ('%s')", event["id"], event["title"])
        return EventRead(**event)

    async def update_event(self, event_id: str, data: Mapping[str, Any]) -> EventRead:
        """Replace all four fields of an existing event.

        No existence check is made before delegating to the store; a
        missing id surfaces as whatever ``StorageError`` the store raises.
        """
        errors = validate_event_data(data)
        if errors:
            raise EventValidationError(
                "Updating the event failed due to validation errors.", errors
            )
        event = self.store.replace(event_id, data)
        logger.info("Updated event %s", event_id)
        return EventRead(**event)

    async def delete_event(self, event_id: str) -> None:
        self.store.remove(event_id)
        logger.info("Deleted event %s", event_id)
