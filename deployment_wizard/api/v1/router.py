"""Main router for API v1."""

from fastapi import APIRouter

from deployment_wizard.api.v1 import backends, health, wizards

router = APIRouter(prefix="/v1")

# Include sub-routers
router.include_router(health.router, tags=["health"])
router.include_router(backends.router, prefix="/backends", tags=["backends"])
router.include_router(wizards.router, prefix="/wizards", tags=["wizards"])
