"""
Top-level router for version 1 of the API.

This router aggregates domain-specific routers under a unified
prefix.  Events are currently the only domain.
"""

from fastapi import APIRouter

from .endpoints import events

router = APIRouter()

router.include_router(events.router, prefix="/events", tags=["events"])
