"""
Centralized configuration for the profile sync backend.

All settings are loaded from environment variables with sensible defaults.
Integration-specific settings are namespaced (e.g., CLERK_*, SUPABASE_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Profile Sync API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""
    supabase_db_url: str = ""  # direct Postgres URI, only used by run_migrations.py

    # Clerk webhooks
    clerk_webhook_signing_secret: str = ""
    webhook_tolerance_seconds: int = 300  # max clock skew for svix-timestamp

    # Roles
    default_role_code: str = "user"
    admin_role_codes: list[str] = ["admin"]

    def missing_webhook_config(self) -> list[str]:
        """
        Names of the settings the webhook flow cannot run without.

        Only environment variable names are returned, never values.
        """
        required = {
            "CLERK_WEBHOOK_SIGNING_SECRET": self.clerk_webhook_signing_secret,
            "SUPABASE_URL": self.supabase_url,
            "SUPABASE_SERVICE_ROLE_KEY": self.supabase_service_role_key,
            "DEFAULT_ROLE_CODE": self.default_role_code,
        }
        return [name for name, value in required.items() if not value]

    def require_webhook_config(self) -> None:
        """
        Fail fast when webhook configuration is incomplete.

        Raises:
            ConfigurationError: If any required setting is empty
        """
        missing = self.missing_webhook_config()
        if missing:
            raise ConfigurationError(
                f"Webhook configuration missing. Set {', '.join(missing)} environment variables.",
                details={"missing": missing},
            )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
