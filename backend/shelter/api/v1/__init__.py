"""Versioned API router."""

from fastapi import APIRouter

from . import animals, auth, health, medications, migrations

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(animals.router, prefix="/animals", tags=["animals"])
router.include_router(medications.router, tags=["medications"])
router.include_router(migrations.router, tags=["migrations"])
