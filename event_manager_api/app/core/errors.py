"""
Domain exceptions and their HTTP representation.

Two kinds of failures are surfaced to clients.  Validation failures
(``EventValidationError``) become a 422 response carrying a per-field
message map so that a form can show every problem at once.  Storage
failures (``StorageError`` and its subclasses) become a generic 500
response; details are logged on the server and never sent to clients.
"""

import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong."

# Starlette renamed its 422 constant; the number is what clients see.
HTTP_UNPROCESSABLE = 422


class EventManagerError(Exception):
    """Base class for all errors raised by the event manager."""


class EventValidationError(EventManagerError):
    """Client supplied event data failed one or more field checks."""

    def __init__(self, message: str, errors: Dict[str, str]) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors


class StorageError(EventManagerError):
    """The persistence collaborator failed (I/O error, missing record, ...)."""


class EventNotFoundError(StorageError):
    """No event exists with the requested identifier."""

    def __init__(self, event_id: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"Could not find event for id {event_id}.")
        self.event_id = event_id


async def validation_error_handler(request: Request, exc: EventValidationError) -> JSONResponse:
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.errors)
    return JSONResponse(
        status_code=HTTP_UNPROCESSABLE,
        content={"message": exc.message, "errors": exc.errors},
    )


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": GENERIC_ERROR_MESSAGE},
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report bodies FastAPI could not parse in the same shape as field errors."""
    errors: Dict[str, str] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        key = ".".join(loc) or "body"
        errors.setdefault(key, error.get("msg", "Invalid value."))
    return JSONResponse(
        status_code=HTTP_UNPROCESSABLE,
        content={"message": "The request could not be processed.", "errors": errors},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the handlers above to ``app``."""
    app.add_exception_handler(EventValidationError, validation_error_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
