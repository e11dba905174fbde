"""Terminal frontend for the Event Manager API.

The frontend is organised the way a data-router UI is: every view has
a *loader* that fetches what the view needs before it is rendered,
and every form has an *action* that forwards the submitted fields to
the backend.  An action either returns a :class:`Redirect` (the save
worked, go back to the list), returns :class:`ActionData` (the backend
rejected the fields with a 422; show the messages above the form) or
raises :class:`RouteError` (anything else; show the error page).

Views are rendered as plain text.  :class:`EventManagerFrontend` ties
the pieces together behind a small command line::

    python event_manager_frontend.py list
    python event_manager_frontend.py show <id>
    python event_manager_frontend.py new
    python event_manager_frontend.py edit <id>
    python event_manager_frontend.py delete <id>

``EVENT_MANAGER_BASE_URL`` selects the API (default
``http://localhost:8080``).
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from event_manager_client import DEFAULT_BASE_URL, EVENT_FIELDS, EventManagerAPI


logger = logging.getLogger(__name__)

EVENTS_PATH = "/events"

FIELD_LABELS = {
    "title": "Title",
    "image": "Image",
    "date": "Date",
    "description": "Description",
}


class RouteError(Exception):
    """A loader or action failed; rendered by :func:`render_error_page`."""

    def __init__(self, message: str, status: Optional[int] = 500) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


@dataclass
class Redirect:
    location: str


@dataclass
class ActionData:
    """Validation failure returned by the backend, shown above the form."""

    message: str
    errors: Dict[str, str] = field(default_factory=dict)


ActionResult = Union[Redirect, ActionData]


# ----------------------------------------------------------------------
# Loaders
# ----------------------------------------------------------------------
def events_loader(api: EventManagerAPI) -> List[Dict[str, Any]]:
    events, error = api.list_events()
    if error:
        raise RouteError("Could not fetch events.", status=500)
    return events


def event_detail_loader(api: EventManagerAPI, event_id: str) -> Dict[str, Any]:
    event, error = api.get_event(event_id)
    if error or event is None:
        raise RouteError("Could not fetch details for selected event.", status=500)
    return event


# ----------------------------------------------------------------------
# Actions
# ----------------------------------------------------------------------
def event_form_action(
    api: EventManagerAPI,
    method: str,
    form: Dict[str, Any],
    event_id: Optional[str] = None,
) -> ActionResult:
    """Submit the event form.

    ``method`` is ``"POST"`` for the new-event form and ``"PATCH"`` for
    the edit form, in which case ``event_id`` is required.
    """
    event_data = {name: form.get(name) for name in EVENT_FIELDS}
    method = method.upper()
    if method == "PATCH":
        if event_id is None:
            raise ValueError("event_id is required to update an event")
        _, error = api.update_event(event_id, event_data)
    elif method == "POST":
        _, error = api.create_event(event_data)
    else:
        raise ValueError(f"Unsupported form method {method!r}")

    if error:
        if error.get("status_code") == 422:
            return ActionData(message=error.get("message", ""), errors=error.get("errors") or {})
        raise RouteError("Could not save event.", status=500)
    return Redirect(EVENTS_PATH)


def delete_event_action(
    api: EventManagerAPI,
    event_id: str,
    confirm: Callable[[str], bool],
) -> Optional[Redirect]:
    """Delete an event once the user confirms.

    Returns ``None`` without sending a request if the user declines.
    """
    if not confirm("Are you sure?"):
        return None
    _, error = api.delete_event(event_id)
    if error:
        raise RouteError("Could not delete event.", status=500)
    return Redirect(EVENTS_PATH)


# ----------------------------------------------------------------------
# Views
# ----------------------------------------------------------------------
def render_events_list(events: Sequence[Dict[str, Any]]) -> str:
    lines = ["All Events"]
    if not events:
        lines.append("  (no events yet)")
    for event in events:
        lines.append(f"  [{event['id']}] {event['title']} ({event['date']})")
    return "\n".join(lines)


def render_event_item(event: Dict[str, Any]) -> str:
    return "\n".join(
        [
            event["title"],
            f"Date: {event['date']}",
            f"Image: {event['image']}",
            "",
            event["description"],
        ]
    )


def render_event_form(
    event: Optional[Dict[str, Any]] = None,
    action_data: Optional[ActionData] = None,
) -> str:
    """Render the form, pre-populated from ``event`` when editing."""
    lines: List[str] = []
    if action_data and action_data.errors:
        if action_data.message:
            lines.append(action_data.message)
        lines.extend(f"  - {message}" for message in action_data.errors.values())
        lines.append("")
    for name in ("title", "image", "date", "description"):
        value = event.get(name, "") if event else ""
        lines.append(f"{FIELD_LABELS[name]}: {value}")
    return "\n".join(lines)


def render_error_page(error: RouteError) -> str:
    title = "An error occurred"
    message = "Something went wrong!"
    if error.status == 500:
        message = error.message
    if error.status == 404:
        title = "Not found"
        message = "Could not find resource or page."
    return f"{title}\n{message}"


# ----------------------------------------------------------------------
# Command line driver
# ----------------------------------------------------------------------
class EventManagerFrontend:
    """Runs loaders and actions for terminal commands and prints the views."""

    def __init__(
        self,
        api: EventManagerAPI,
        *,
        input_func: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
    ) -> None:
        self.api = api
        self.input = input_func
        self.output = output

    def confirm(self, question: str) -> bool:
        answer = self.input(f"{question} [y/N] ").strip().lower()
        return answer in {"y", "yes"}

    def navigate(self, path: str) -> None:
        """Render the view for ``path`` (``/events`` or ``/events/<id>``)."""
        parts = [part for part in path.strip("/").split("/") if part]
        if parts == ["events"]:
            self.output(render_events_list(events_loader(self.api)))
        elif len(parts) == 2 and parts[0] == "events":
            # Detail page sits above the list, as in the browser layout.
            self.output(render_event_item(event_detail_loader(self.api, parts[1])))
            self.output(render_events_list(events_loader(self.api)))
        else:
            raise RouteError(f"No page at {path}", status=404)

    def show_list(self) -> None:
        self.navigate(EVENTS_PATH)

    def show_event(self, event_id: str) -> None:
        self.navigate(f"{EVENTS_PATH}/{event_id}")

    def _prompt_fields(self, defaults: Dict[str, Any]) -> Dict[str, Any]:
        form: Dict[str, Any] = {}
        for name in ("title", "image", "date", "description"):
            default = defaults.get(name) or ""
            hint = f" [{default}]" if default else ""
            value = self.input(f"{FIELD_LABELS[name]}{hint}: ")
            form[name] = value if value else default
        return form

    def _run_form(self, method: str, event: Optional[Dict[str, Any]] = None) -> None:
        event_id = event["id"] if event else None
        values: Dict[str, Any] = dict(event or {})
        self.output(render_event_form(values))
        while True:
            values = self._prompt_fields(values)
            result = event_form_action(self.api, method, values, event_id=event_id)
            if isinstance(result, Redirect):
                self.navigate(result.location)
                return
            # Rejected: show what was submitted with the field errors.
            self.output(render_event_form(values, result))
            if not self.confirm("Edit the fields and submit again?"):
                return

    def new_event(self) -> None:
        self._run_form("POST")

    def edit_event(self, event_id: str) -> None:
        event = event_detail_loader(self.api, event_id)
        self._run_form("PATCH", event)

    def delete_event(self, event_id: str) -> None:
        redirect = delete_event_action(self.api, event_id, self.confirm)
        if redirect is not None:
            self.navigate(redirect.location)

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        parser = build_parser()
        args = parser.parse_args(argv)
        try:
            if args.command == "list":
                self.show_list()
            elif args.command == "show":
                self.show_event(args.event_id)
            elif args.command == "new":
                self.new_event()
            elif args.command == "edit":
                self.edit_event(args.event_id)
            elif args.command == "delete":
                self.delete_event(args.event_id)
        except RouteError as exc:
            logger.debug("Route error %s: %s", exc.status, exc.message)
            self.output(render_error_page(exc))
            return 1
        return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Manage events through the Event Manager API.")
    sub = ap.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="List all events")
    for name, help_text in (
        ("show", "Show one event"),
        ("edit", "Edit an event"),
        ("delete", "Delete an event"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("event_id", help="Event identifier")
    sub.add_parser("new", help="Create an event")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(level=logging.WARNING, format="%(asctime)s [%(levelname)s] %(message)s")
    base_url = os.getenv("EVENT_MANAGER_BASE_URL", DEFAULT_BASE_URL)
    frontend = EventManagerFrontend(EventManagerAPI(base_url=base_url))
    return frontend.run(argv)


if __name__ == "__main__":
    sys.exit(main())
