"""
Centralized configuration for the Fefo backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SUPABASE_*, CAMPUS_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


# Campus box from the map screen, widened by roughly one mile on each side
_CAMPUS_MARGIN = 0.0145


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Fefo"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""

    # Document store
    documents_table: str = "documents"
    transaction_rpc: str = "commit_documents"
    transaction_max_attempts: int = 5

    # Account rules
    institutional_email_domain: str = "@berkeley.edu"
    reserved_usernames: list[str] = [
        "admin", "fefo", "berkeley", "official", "support",
        "help", "team", "staff", "moderator", "mod",
    ]
    min_username_length: int = 3
    max_username_length: int = 20
    min_password_length: int = 8

    # Event rules
    comment_max_length: int = 280
    max_event_tags: int = 4
    ending_soon_minutes: int = 15
    campus_timezone: str = "America/Los_Angeles"

    # Simple rectangular geofence around campus
    enforce_campus_bounds: bool = True
    campus_min_latitude: float = 37.8631 - _CAMPUS_MARGIN
    campus_max_latitude: float = 37.8791 + _CAMPUS_MARGIN
    campus_min_longitude: float = -122.2691 - _CAMPUS_MARGIN
    campus_max_longitude: float = -122.2495 + _CAMPUS_MARGIN

    # Auth flow timing (seconds)
    username_check_debounce_seconds: float = 0.5
    credential_expired_redirect_seconds: float = 2.0
    session_ttl_seconds: int = 3600


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
