"""
Field predicates for event payloads.

Each predicate looks at a single value and returns a boolean.  There
are no cross-field checks and no lookups against the store.
``validate_event_data`` runs every check and collects all failures so
that a client can correct every problem in one round trip.
"""

import re
from datetime import datetime
from typing import Any, Dict, Mapping

DATE_FORMAT = "%Y-%m-%d"

# strptime accepts unpadded and non-ASCII digits; pin the shape first.
_DATE_SHAPE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)

# http(s) URLs or absolute/relative paths, no whitespace anywhere.
_IMAGE_URL_RE = re.compile(r"(?:https?://\S+|(?:/|\./|\.\./)\S+)", re.IGNORECASE)


def is_valid_text(value: Any, min_length: int = 1) -> bool:
    return isinstance(value, str) and len(value.strip()) >= min_length


def is_valid_date(value: Any) -> bool:
    """Return True if ``value`` is a calendar date in ``YYYY-MM-DD`` form."""
    if not isinstance(value, str) or not _DATE_SHAPE_RE.fullmatch(value):
        return False
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return False
    return True


def is_valid_image_url(value: Any) -> bool:
    return isinstance(value, str) and bool(value) and bool(_IMAGE_URL_RE.fullmatch(value))


def validate_event_data(data: Mapping[str, Any]) -> Dict[str, str]:
    """Return a map of field name to error message for every invalid field.

    An empty dict means the data is valid.
    """
    errors: Dict[str, str] = {}

    if not is_valid_text(data.get("title")):
        errors["title"] = "Invalid title."

    if not is_valid_text(data.get("description")):
        errors["description"] = "Invalid description."

    if not is_valid_date(data.get("date")):
        errors["date"] = "Invalid date."

    if not is_valid_image_url(data.get("image")):
        errors["image"] = "Invalid image."

    return errors
