"""Application configuration via pydantic settings."""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from typing import Any

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed application configuration."""

    app_env: str = Field("local", alias="APP_ENV")
    app_name: str = "Hotel Rates API"
    api_v1_prefix: str = "/api/v1"

    database_url: str = Field(
        "sqlite+aiosqlite:///./hotel_rates.db", alias="DATABASE_URL"
    )
    sync_database_url: str | None = Field(default=None, alias="SYNC_DATABASE_URL")

    weekend_multiplier: Decimal = Field(Decimal("1.5"), alias="WEEKEND_MULTIPLIER")
    default_base_prices: dict[str, Decimal] = Field(
        default_factory=lambda: {
            "single": Decimal("100.00"),
            "double": Decimal("150.00"),
            "suite": Decimal("250.00"),
        },
        alias="DEFAULT_BASE_PRICES",
    )
    cancellation_lookback_days: int = Field(30, alias="CANCELLATION_LOOKBACK_DAYS")
    strict_room_references: bool = Field(False, alias="STRICT_ROOM_REFERENCES")

    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        alias="CORS_ALLOW_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=False, alias="CORS_ALLOW_CREDENTIALS")

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[3] / ".env",
        case_sensitive=False,
        populate_by_name=True,
    )

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("weekend_multiplier")
    @classmethod
    def _positive_multiplier(cls, value: Decimal) -> Decimal:
        if value <= 0:
            raise ValueError("weekend_multiplier must be positive")
        return value


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()  # type: ignore[call-arg]
