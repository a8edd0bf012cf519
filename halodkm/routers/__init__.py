"""API routers for the HaloDKM backend."""
from fastapi import APIRouter

from . import audit, events, health, kas

API_PREFIX = "/api/v1"


def get_api_router() -> APIRouter:
    """Return the versioned API router."""

    api_router = APIRouter(prefix=API_PREFIX)
    api_router.include_router(health.router)
    api_router.include_router(events.router)
    api_router.include_router(kas.router)
    api_router.include_router(audit.router)
    return api_router
