"""
Core configuration module for the Royal Road experiment.

This module manages application settings using Pydantic Settings, providing
type-safe configuration with environment variable support.
"""

from typing import Any, Dict
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be overridden via environment variables or a `.env` file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Logfire settings
    logfire_token: str = Field(default="")
    logfire_service_name: str = Field(default="royal-road-cli")
    logfire_environment: str = Field(default="development")

    def get_logfire_settings(self) -> Dict[str, Any]:
        """Get Logfire configuration."""
        return {
            "token": self.logfire_token or None,
            "service_name": self.logfire_service_name,
            "environment": self.logfire_environment,
            "send_to_logfire": "if-token-present",
        }


# Create global settings instance
settings = Settings()
