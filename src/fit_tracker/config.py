"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    api_token: str
    off_base_url: str = "https://pl.openfoodfacts.org"
    off_page_size: int = 5
    lookup_min_chars: int = 3
    lookup_cache_ttl_seconds: int = 3600
    lookup_debounce_ms: int = 600
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def lookup_debounce_seconds(self) -> float:
        return self.lookup_debounce_ms / 1000
