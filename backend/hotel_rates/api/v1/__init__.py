"""Versioned API router."""

from fastapi import APIRouter

from . import health, pricing, reports, reservations, rooms

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(pricing.router)
router.include_router(reservations.router, prefix="/reservations", tags=["reservations"])
router.include_router(rooms.router, prefix="/rooms", tags=["rooms"])
router.include_router(reports.router, tags=["reports"])
