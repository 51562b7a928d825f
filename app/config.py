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
# Third-party integrations (Stripe, Buffer, SendGrid) are optional. When their
# keys are missing the related endpoints report a configuration error instead
# of failing at startup.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

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

    SUPABASE_JWT_SECRET: str = Field(
        default="",
        description="Legacy HS256 secret used to verify Supabase access tokens"
    )

    # -------------------------------------------------------------------------
    # Redis Configuration (for Celery)
    # -------------------------------------------------------------------------

    REDIS_URL: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL for Celery broker"
    )

    # -------------------------------------------------------------------------
    # xAI / LLM Configuration
    # -------------------------------------------------------------------------
    # xAI exposes an OpenAI-compatible API, so the openai SDK is pointed at it

    XAI_API_KEY: str = Field(
        ...,
        description="xAI API key for the AI features"
    )

    XAI_BASE_URL: str = Field(
        default="https://api.x.ai/v1",
        description="Base URL of the OpenAI-compatible xAI endpoint"
    )

    XAI_MODEL: str = Field(
        default="grok-3",
        description="Model for analysis tasks (bug triage, pricing, moderation)"
    )

    XAI_FAST_MODEL: str = Field(
        default="grok-3-mini",
        description="Cheaper model for short generations and feedback triage"
    )

    XAI_TIMEOUT: float = Field(
        default=15.0,
        gt=0,
        description="Request timeout in seconds for xAI calls"
    )

    XAI_MAX_TOKENS: int = Field(
        default=500,
        ge=1,
        description="Default completion token limit"
    )

    XAI_TEMPERATURE: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Default generation temperature"
    )

    # -------------------------------------------------------------------------
    # Payments (Stripe)
    # -------------------------------------------------------------------------

    STRIPE_SECRET_KEY: str = Field(
        default="",
        description="Stripe secret key (payments disabled when empty)"
    )

    STRIPE_PUBLISHABLE_KEY: str = Field(
        default="",
        description="Stripe publishable key returned to the frontend"
    )

    STRIPE_CURRENCY: str = Field(
        default="usd",
        description="Currency for prices and payment intents"
    )

    # -------------------------------------------------------------------------
    # Social Media (Buffer)
    # -------------------------------------------------------------------------

    BUFFER_API_KEY: str = Field(
        default="",
        description="Buffer access token"
    )

    BUFFER_API_URL: str = Field(
        default="https://api.bufferapp.com/1",
        description="Buffer API base URL"
    )

    # -------------------------------------------------------------------------
    # Email (SendGrid)
    # -------------------------------------------------------------------------

    SENDGRID_API_KEY: str = Field(
        default="",
        description="SendGrid API key (emails are skipped when empty)"
    )

    EMAIL_FROM: str = Field(
        default="info@elevion.dev",
        description="Sender address for outgoing email"
    )

    EMAIL_FROM_NAME: str = Field(
        default="Elevion",
        description="Sender display name"
    )

    CONTACT_NOTIFY_EMAIL: str = Field(
        default="info@elevion.dev",
        description="Inbox that receives contact form notifications"
    )

    # -------------------------------------------------------------------------
    # Monitoring
    # -------------------------------------------------------------------------

    LOG_TO_DATABASE: bool = Field(
        default=True,
        description="Persist ERROR log records to the logs table"
    )

    REPORTS_DIR: str = Field(
        default="reports",
        description="Directory where bug summary reports are written"
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
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://elevion.dev" -> ["http://localhost:3000", "https://elevion.dev"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def stripe_enabled(self) -> bool:
        return bool(self.STRIPE_SECRET_KEY)

    @property
    def buffer_enabled(self) -> bool:
        return bool(self.BUFFER_API_KEY)

    @property
    def email_enabled(self) -> bool:
        return bool(self.SENDGRID_API_KEY)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
