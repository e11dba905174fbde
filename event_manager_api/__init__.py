"""
Top-level package for the Event Manager API.

All functionality lives in submodules under ``app``; import the
ASGI application as ``event_manager_api.app.main:app``.
"""

__all__ = []
