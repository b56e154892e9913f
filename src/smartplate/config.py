"""Application configuration."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000,"
    "https://smartplate-beryl.vercel.app,"
    "https://smartplate.vercel.app"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Every third-party credential is optional. A missing key routes the
    matching adapter to its fallback data instead of failing.
    """

    coles_api_key: str | None = None
    coles_api_base_url: str = "https://coles-product-price-api.p.rapidapi.com"
    coles_api_host: str = "coles-product-price-api.p.rapidapi.com"
    woolworths_api_key: str | None = None
    woolworths_api_base_url: str = (
        "https://woolworths-products-api.p.rapidapi.com"
    )
    woolworths_api_host: str = "woolworths-products-api.p.rapidapi.com"
    deal_search_query: str = "special"
    price_api_timeout_seconds: float = 10.0
    spoonacular_api_key: str | None = None
    spoonacular_base_url: str = "https://api.spoonacular.com/recipes"
    recipe_api_timeout_seconds: float = 10.0
    cors_origins: str = DEFAULT_CORS_ORIGINS
    cors_origin_regex: str | None = r"https://.*\.vercel\.app"
    port: int = 3001
    deal_refresh_hour: int = Field(default=6, ge=0, le=23)
    scheduled_refresh_enabled: bool | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def refresh_schedule_active(self) -> bool:
        """Whether the daily deal refresh task should run."""
        if self.scheduled_refresh_enabled is not None:
            return self.scheduled_refresh_enabled
        return self.environment == "production"


def parse_cors_origins(raw: str | None) -> list[str]:
    """Parse a comma-separated list of allowed CORS origins."""
    if raw is None:
        return []
    cleaned = raw.strip()
    if cleaned == "*":
        return ["*"]
    origins: list[str] = []
    for chunk in cleaned.split(","):
        value = chunk.strip().rstrip("/")
        if value and value not in origins:
            origins.append(value)
    return origins
