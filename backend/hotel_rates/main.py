"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hotel_rates.api import build_api_router
from hotel_rates.core.config import get_settings
from hotel_rates.db.session import create_schema, dispose_engine, get_sessionmaker
from hotel_rates.services.pricing_store_service import load_multiplier_store

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(application: FastAPI):
    if settings.app_env == "local":
        try:
            await create_schema()
        except Exception:  # pragma: no cover - best effort local bootstrap
            logger.exception("Failed to create local database schema")
    try:
        async with get_sessionmaker()() as session:
            application.state.multiplier_store = await load_multiplier_store(session)
    except Exception:  # pragma: no cover - loaded lazily on first request instead
        logger.exception("Failed to preload pricing tables")
        application.state.multiplier_store = None
    try:
        yield
    finally:
        await dispose_engine()


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.state.multiplier_store = None

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin for origin in settings.cors_allow_origins if origin],
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)
app.add_middleware(CorrelationIdMiddleware, header_name="X-Request-ID")

app.include_router(build_api_router(settings.api_v1_prefix))


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Return a simple welcome message."""
    return {"message": settings.app_name}
