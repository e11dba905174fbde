"""
Pydantic models for event data.

These schemas define the structure of event data exchanged via the
API.  ``EventBase`` contains the four user supplied fields and
``EventRead`` extends it with the store assigned ``id``.

Incoming bodies are parsed into ``EventPayload`` whose fields accept
any JSON value.  Field checks are done by ``util.validation`` so that
every invalid field is reported in a single 422 response instead of
being rejected piecemeal by schema validation.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class EventBase(BaseModel):
    title: str = Field(..., examples=["Meetup"])
    description: str = Field(..., examples=["An evening of short talks"])
    date: str = Field(..., examples=["2024-05-01"])
    image: str = Field(..., examples=["https://example.com/meetup.png"])


class EventRead(EventBase):
    """Schema for reading an event from the API."""

    id: str

    model_config = {
        "from_attributes": True,
    }


class EventPayload(BaseModel):
    """Body of create and update requests.

    All fields are optional and untyped; missing or malformed values are
    reported by the field predicates.
    """

    title: Optional[Any] = None
    description: Optional[Any] = None
    date: Optional[Any] = None
    image: Optional[Any] = None


class EventListResponse(BaseModel):
    events: List[EventRead]


class EventDetailResponse(BaseModel):
    event: EventRead


class EventSavedResponse(BaseModel):
    message: str
    event: EventRead


class MessageResponse(BaseModel):
    message: str


class ValidationErrorResponse(BaseModel):
    message: str
    errors: Dict[str, str]
