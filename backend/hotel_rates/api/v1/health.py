"""Health check endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Request

from hotel_rates import __version__
from hotel_rates.core.config import get_settings

router = APIRouter()


@router.get("", summary="Service health status")
async def healthcheck(request: Request) -> dict[str, str]:
    """Report service metadata and whether pricing tables are loaded."""
    settings = get_settings()
    store = getattr(request.app.state, "multiplier_store", None)
    return {
        "status": "ok",
        "service": settings.app_name,
        "version": __version__,
        "environment": settings.app_env,
        "pricing_store": "loaded" if store is not None else "pending",
        "checked_at": datetime.now(UTC).isoformat(),
    }
