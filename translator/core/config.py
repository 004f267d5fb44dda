"""
Application configuration using pydantic-settings.

Loads and validates environment variables from .env file or system environment.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =============================================================================
    # API & Application
    # =============================================================================
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=3000)
    environment: Literal["development", "production", "testing"] = Field(default="development")

    # =============================================================================
    # Discord Integration
    # =============================================================================
    discord_public_key: str = Field(
        ...,  # Required field
        description="Application public key used to verify interaction signatures",
    )
    discord_app_id: str = Field(
        ...,  # Required field
        description="Discord application ID",
    )
    discord_token: str = Field(
        ...,  # Required field
        description="Bot token used for follow-up messages and command registration",
    )
    discord_api_base_url: str = Field(default="https://discord.com/api/v10")
    discord_dev_guild_id: str | None = Field(
        default=None,
        description="Optional guild for instant command registration while testing",
    )
    discord_timeout: int = Field(default=15)
    register_commands_on_startup: bool = Field(default=False)

    # =============================================================================
    # Gemini Configuration
    # =============================================================================
    gemini_api_key: str = Field(
        ...,  # Required field
        description="Google Gemini API key",
    )
    gemini_model: str = Field(default="gemini-2.5-flash")
    gemini_base_url: str = Field(default="https://generativelanguage.googleapis.com/v1beta")
    gemini_timeout: float | None = Field(
        default=None,
        description="Seconds to wait for Gemini (None waits indefinitely)",
    )

    # =============================================================================
    # Translation
    # =============================================================================
    default_target_language: str = Field(default="english")
    max_message_length: int = Field(default=2000)
    max_language_length: int = Field(default=50)

    # =============================================================================
    # Database Configuration
    # =============================================================================
    database_url: str = Field(
        default="sqlite:///./translator.db",
        description="Database connection URL",
    )
    db_pool_size: int = Field(default=10)
    db_max_overflow: int = Field(default=0)
    db_pool_timeout: int = Field(default=30)
    db_pool_pre_ping: bool = Field(default=True)
    auto_migrate: bool = Field(default=True)

    # =============================================================================
    # Retention
    # =============================================================================
    retention_enabled: bool = Field(default=True)
    retention_days: int = Field(default=90, ge=1)

    # =============================================================================
    # Redis & Celery Configuration
    # =============================================================================
    redis_url: str = Field(default="redis://localhost:6379/0")
    celery_broker_url: str = Field(default="redis://localhost:6379/0")
    celery_result_backend: str = Field(default="redis://localhost:6379/0")

    # =============================================================================
    # Logging Configuration
    # =============================================================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "text"] = Field(default="json")
    log_output: Literal["stdout", "file", "both"] = Field(default="stdout")
    log_file: str = Field(default="/app/logs/translator.log")
    log_message_preview_chars: int = Field(default=40)

    # =============================================================================
    # Security
    # =============================================================================
    admin_api_key: str | None = Field(
        default=None,
        description="Key required by the /api/history endpoints (unset disables them)",
    )

    # =============================================================================
    # Development Settings
    # =============================================================================
    debug: bool = Field(default=False)
    auto_reload: bool = Field(default=False)


# =============================================================================
# Singleton Settings Instance
# =============================================================================
settings = Settings()


# =============================================================================
# Helper Functions
# =============================================================================

def get_settings() -> Settings:
    """
    Get the global settings instance.

    This function can be used as a FastAPI dependency.

    Returns:
        Settings: The global settings instance
    """
    return settings


def is_production() -> bool:
    """Check if the application is running in production mode."""
    return settings.environment == "production"


def is_development() -> bool:
    """Check if the application is running in development mode."""
    return settings.environment == "development"


def is_testing() -> bool:
    """Check if the application is running in testing mode."""
    return settings.environment == "testing"
