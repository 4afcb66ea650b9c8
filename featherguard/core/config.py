"""
FeatherGuard - Configuration Management
Centralized configuration using pydantic-settings.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Supabase (object store + record store)
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    photo_bucket: str = "bird-photos"
    reports_table: str = "reports"

    # Backends: "supabase" or "memory" for photos,
    # "supabase", "database" or "memory" for reports
    object_store_backend: str = "memory"
    record_store_backend: str = "memory"

    # Database (used when record_store_backend == "database")
    database_url: str = "sqlite:///featherguard.db"

    # Google Gemini (species classification)
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.0-flash"
    species_language: str = "Traditional Chinese"
    classification_fallback_text: str = "Recognition failed - please enter manually"
    not_a_bird_text: str = "Not a bird"

    # Timeouts (seconds)
    classification_timeout_seconds: float = 30.0
    storage_timeout_seconds: float = 30.0
    geolocation_timeout_seconds: float = 10.0

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
