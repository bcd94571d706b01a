"""
Top-level router for version 1 of the API.

Aggregates the domain routers under a unified prefix.  When a new
domain is added, include its router here.
"""

from fastapi import APIRouter

from .endpoints import (
    backup,
    missing_parts,
    notes,
    phone,
    preferences,
    reports,
    services,
    statistics,
)

router = APIRouter()

router.include_router(services.router, prefix="/services", tags=["services"])
router.include_router(notes.router, prefix="/notes", tags=["notes"])
router.include_router(missing_parts.router, prefix="/missing-parts", tags=["missing-parts"])
router.include_router(statistics.router, prefix="/statistics", tags=["statistics"])
router.include_router(reports.router, prefix="/reports", tags=["reports"])
router.include_router(backup.router, prefix="/backup", tags=["backup"])
router.include_router(preferences.router, prefix="/preferences", tags=["preferences"])
router.include_router(phone.router, prefix="/phone", tags=["phone"])
