# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# The Settings class validates all values at startup, catching configuration
# errors early rather than at runtime.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # These are required - app won't start without them

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_ANON_KEY: str = Field(
        ...,
        description="Supabase anon/public API key"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    # -------------------------------------------------------------------------
    # Auth0 Configuration
    # -------------------------------------------------------------------------
    # Optional. Without the management credentials the user endpoints
    # answer from mock data; without the audience caller tokens are not
    # verified (development only).

    AUTH0_DOMAIN: str | None = Field(
        default=None,
        description="Auth0 tenant domain (e.g., contaempresa.us.auth0.com)"
    )

    AUTH0_MGMT_CLIENT_ID: str | None = Field(
        default=None,
        description="Client ID of the machine-to-machine app for the Management API"
    )

    AUTH0_MGMT_CLIENT_SECRET: str | None = Field(
        default=None,
        description="Client secret of the machine-to-machine app"
    )

    AUTH0_AUDIENCE: str | None = Field(
        default=None,
        description="API audience expected in caller access tokens"
    )

    AUTH0_CLAIMS_NAMESPACE: str = Field(
        default="https://contaempresa.app/",
        description="Namespace prefix of the custom app_metadata claim"
    )

    AUTH0_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0,
        le=60,
        description="Timeout for calls to Auth0"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:5173",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # Don't fail if .env doesn't exist (useful for production where
        # env vars are set directly)
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:5173, https://app.contaempresa.com" -> [...]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def auth0_management_configured(self) -> bool:
        """True when all three Management API credentials are present."""
        return bool(
            self.AUTH0_DOMAIN
            and self.AUTH0_MGMT_CLIENT_ID
            and self.AUTH0_MGMT_CLIENT_SECRET
        )

    @property
    def missing_auth0_management_vars(self) -> list[str]:
        """Names of the Management API variables that are not set."""
        names = ("AUTH0_DOMAIN", "AUTH0_MGMT_CLIENT_ID", "AUTH0_MGMT_CLIENT_SECRET")
        return [name for name in names if not getattr(self, name)]

    @property
    def token_verification_configured(self) -> bool:
        """True when caller tokens can be verified against the Auth0 JWKS."""
        return bool(self.AUTH0_DOMAIN and self.AUTH0_AUDIENCE)

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
