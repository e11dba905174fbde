"""
Application package initializer.

The package is organised into logical pieces: ``core`` (settings,
logging, database and error handling), ``schemas`` (Pydantic models),
``data`` (event stores), ``services`` (business rules), ``util``
(field validation) and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
