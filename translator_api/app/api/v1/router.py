"""
Top‑level router for version 1 of the API.

This router aggregates the entity routers (languages, tags, messages)
under a unified prefix.  When new endpoints are added, update this
file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import languages, messages, tags

router = APIRouter()

router.include_router(languages.router, prefix="/languages", tags=["languages"])
router.include_router(tags.router, prefix="/tags", tags=["tags"])
router.include_router(messages.router, prefix="/messages", tags=["messages"])
