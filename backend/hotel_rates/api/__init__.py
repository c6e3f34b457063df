"""HTTP routers for the rates API."""

from fastapi import APIRouter

from hotel_rates.api.v1 import router as v1_router


def build_api_router(prefix: str) -> APIRouter:
    """Mount the versioned routes under ``prefix``."""
    router = APIRouter()
    router.include_router(v1_router, prefix=prefix)
    return router


__all__ = ["build_api_router"]
