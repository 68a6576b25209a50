"""
userclient/core/config.py

Purpose: Client configuration

- Loads environment variables (and an optional .env file)
- Centralizes the users API base URL and transport options
- Locates the durable session store on disk
- Validates configuration before the client is used
"""

from pydantic import Field, validator
from pydantic_settings import BaseSettings
from typing import Optional, Literal


class Settings(BaseSettings):
    """
    Client settings loaded from environment variables.
    """

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # Users API
    USERS_API_BASE_URL: str = Field(
        default="http://localhost:8080/users",
        description="Root resource URL of the users API"
    )
    USERS_API_TIMEOUT: Optional[float] = Field(
        default=None,
        description="Request timeout in seconds (unset keeps the httpx default)"
    )

    # Active user persistence
    SESSION_STORE_PATH: str = Field(
        default=".userclient/session.json",
        description="JSON file holding the active user id between runs"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    @validator("USERS_API_TIMEOUT")
    def validate_timeout(cls, v):
        if v is not None and v <= 0:
            raise ValueError("USERS_API_TIMEOUT must be positive")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()


def validate_settings(current: Optional[Settings] = None):
    """
    Validates critical settings before the client is used.
    Raises ValueError listing every setting that is missing or invalid.
    """
    current = current or settings
    errors = []

    if not current.USERS_API_BASE_URL:
        errors.append("USERS_API_BASE_URL is required")
    elif not current.USERS_API_BASE_URL.startswith(("http://", "https://")):
        errors.append("USERS_API_BASE_URL must be an http(s) URL")

    if current.LOG_LEVEL.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        errors.append(f"LOG_LEVEL '{current.LOG_LEVEL}' is not a valid level")

    if not current.SESSION_STORE_PATH:
        errors.append("SESSION_STORE_PATH is required")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
