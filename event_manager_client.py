"""Event Manager API client.

This module defines a small client wrapper around the Event Manager
REST API.  It uses the ``requests`` library internally and exposes
one method per endpoint:

* :meth:`list_events` – return all events.
* :meth:`get_event` – fetch a single event by its identifier.
* :meth:`create_event` – create an event from the four form fields.
* :meth:`update_event` – replace the fields of an existing event.
* :meth:`delete_event` – delete an event.

Every method returns a ``(result, error)`` tuple instead of raising.
On success ``error`` is ``None``.  On failure ``error`` is a
dictionary with the keys ``status_code`` (``None`` when the server
could not be reached), ``message`` and ``errors`` (the per-field map
of a 422 response, otherwise an empty dict).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080"

EVENT_FIELDS = ("title", "description", "date", "image")

ApiError = Dict[str, Any]


class EventManagerAPI:
    """Client for interacting with the Event Manager API."""

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:8080``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for the server before giving up.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[ApiError]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/events``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            errors: Dict[str, str] = {}
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                except ValueError:
                    message = exc.response.text
                else:
                    if isinstance(err_json, dict):
                        message = err_json.get("message") or err_json.get("detail") or ""
                        errors = err_json.get("errors") or {}
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message, "errors": errors}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc), "errors": {}}

    @staticmethod
    def _event_body(data: Dict[str, Any]) -> Dict[str, Any]:
        return {name: data.get(name) for name in EVENT_FIELDS}

    # ------------------------------------------------------------------
    # Event operations
    # ------------------------------------------------------------------
    def list_events(self) -> Tuple[List[Dict[str, Any]], Optional[ApiError]]:
        """Retrieve all events.

        Returns:
            A tuple ``(events, error)``. ``events`` is empty on failure.
        """
        data, error = self._request("GET", "/events")
        if error:
            return [], error
        if isinstance(data, dict) and isinstance(data.get("events"), list):
            return data["events"], None
        return [], None

    def get_event(self, event_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Retrieve a single event by ID."""
        data, error = self._request("GET", f"/events/{event_id}")
        if error:
            return None, error
        return (data or {}).get("event"), None

    def create_event(self, data: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Create an event.

        Returns:
            A tuple ``(event, error)`` where ``event`` is the stored event
            including its new ``id``.
        """
        resp, error = self._request("POST", "/events", json_body=self._event_body(data))
        if error:
            return None, error
        return (resp or {}).get("event"), None

    def update_event(
        self, event_id: Any, data: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[ApiError]]:
        """Replace the fields of an existing event."""
        resp, error = self._request(
            "PATCH", f"/events/{event_id}", json_body=self._event_body(data)
        )
        if error:
            return None, error
        return (resp or {}).get("event"), None

    def delete_event(self, event_id: Any) -> Tuple[bool, Optional[ApiError]]:
        """Delete an event.

        Returns:
            A tuple ``(success, error)``.
        """
        _, error = self._request("DELETE", f"/events/{event_id}")
        if error:
            return False, error
        return True, None
