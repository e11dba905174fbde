"""
Event endpoints for API v1.

These routes provide CRUD operations for events.  Validation and
storage failures are raised as domain exceptions and turned into
responses by the handlers registered in ``core.errors``: 422 with a
per-field ``errors`` map for invalid data, a generic 500 for anything
the store cannot do (including unknown ids).
"""

from fastapi import APIRouter, Depends, status

from event_manager_api.app.core.errors import HTTP_UNPROCESSABLE
from event_manager_api.app.data.event_store import EventStore, get_event_store
from event_manager_api.app.schemas.event import (
    EventDetailResponse,
    EventListResponse,
    EventPayload,
    EventSavedResponse,
    MessageResponse,
    ValidationErrorResponse,
)
from event_manager_api.app.services.event_service import EventService


router = APIRouter()

_ERROR_RESPONSES = {
    HTTP_UNPROCESSABLE: {"model": ValidationErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MessageResponse},
}


def get_event_service(store: EventStore = Depends(get_event_store)) -> EventService:
    return EventService(store)


@router.get("", response_model=EventListResponse)
async def list_events(service: EventService = Depends(get_event_service)) -> EventListResponse:
    """Return all events in the order they were created."""
    events = await service.list_events()
    return EventListResponse(events=events)


@router.get("/{event_id}", response_model=EventDetailResponse)
async def get_event(
    event_id: str,
    service: EventService = Depends(get_event_service),
) -> EventDetailResponse:
    """Retrieve a single event by its ID."""
    event = await service.get_event(event_id)
    return EventDetailResponse(event=event)


@router.post(
    "",
    response_model=EventSavedResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
async def create_event(
    payload: EventPayload,
    service: EventService = Depends(get_event_service),
) -> EventSavedResponse:
    """Create a new event.

    Every field is checked before anything is saved; the 422 response
    lists all invalid fields at once.
    """
    event = await service.create_event(payload.model_dump())
    return EventSavedResponse(message="Event saved.", event=event)


@router.patch("/{event_id}", response_model=EventSavedResponse, responses=_ERROR_RESPONSES)
async def update_event(
    event_id: str,
    payload: EventPayload,
    service: EventService = Depends(get_event_service),
) -> EventSavedResponse:
    """Replace the title, description, date and image of an event."""
    event = await service.update_event(event_id, payload.model_dump())
    return EventSavedResponse(message="Event updated.", event=event)


@router.delete("/{event_id}", response_model=MessageResponse)
async def delete_event(
    event_id: str,
    service: EventService = Depends(get_event_service),
) -> MessageResponse:
    """Delete an event."""
    await service.delete_event(event_id)
    return MessageResponse(message="Event deleted.")
