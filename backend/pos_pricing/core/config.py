"""Application configuration via pydantic settings."""

from functools import lru_cache
from pathlib import Path

from typing import Annotated, Any

from pydantic import Field
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

PRODUCTION_DEBOUNCE_MS = (300, 500)
_RELAXED_ENVS = frozenset({"local", "test"})


class Settings(BaseSettings):
    """Typed application configuration."""

    app_env: str = Field("local", alias="APP_ENV")
    app_name: str = Field("Point of Sale Pricing API", alias="APP_NAME")
    api_v1_prefix: str = Field("/api/v1", alias="API_V1_PREFIX")

    database_url: str = Field(
        "sqlite+aiosqlite:///./pos_pricing.db", alias="DATABASE_URL"
    )
    sync_database_url: str | None = Field(default=None, alias="SYNC_DATABASE_URL")

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    recalc_debounce_ms: int = Field(400, ge=0, alias="RECALC_DEBOUNCE_MS")

    cors_allow_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "http://localhost:5174",
        ],
        alias="CORS_ALLOW_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=False, alias="CORS_ALLOW_CREDENTIALS")

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[3] / ".env",
        case_sensitive=False,
    )

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @model_validator(mode="after")
    def _check_debounce_window(self) -> "Settings":
        if self.app_env.lower() in _RELAXED_ENVS:
            return self
        low, high = PRODUCTION_DEBOUNCE_MS
        if not low <= self.recalc_debounce_ms <= high:
            raise ValueError(
                f"RECALC_DEBOUNCE_MS must be between {low} and {high} "
                f"outside local and test environments"
            )
        return self

    @property
    def recalc_debounce_seconds(self) -> float:
        """Debounce window used by the recalculation scheduler."""
        return self.recalc_debounce_ms / 1000


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()  # type: ignore[call-arg]
