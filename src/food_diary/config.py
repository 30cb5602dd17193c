"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    fatsecret_client_id: str | None = None
    fatsecret_client_secret: str | None = None
    fatsecret_region: str | None = "FI"
    fatsecret_food_scopes: str = "basic barcode"
    fatsecret_recipe_scopes: str = ""
    fatsecret_oauth_url: str = "https://oauth.fatsecret.com/connect/token"
    fatsecret_api_url: str = "https://platform.fatsecret.com/rest"
    upstream_timeout_seconds: float = 10.0
    db_path: Path = Path("./data/meals.db")
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 4000
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_scopes(raw: str | None) -> frozenset[str]:
    """Parse a space or comma separated scope list from env."""
    if raw is None:
        return frozenset()
    return frozenset(
        chunk.strip() for chunk in raw.replace(",", " ").split() if chunk.strip()
    )
