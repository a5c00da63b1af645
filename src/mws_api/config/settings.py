"""Configuration management using Pydantic Settings.

Loads configuration from environment variables with .env file support.
"""

from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration."""

    # Developer credentials
    aws_access_key_id: Optional[str] = None
    aws_access_secret: Optional[str] = None

    # Seller (principal) configuration
    seller_id: Optional[str] = None
    mws_auth_token: Optional[str] = None
    area: str = "US"

    # Request pipeline configuration
    response_format: Literal["raw", "structured"] = "structured"
    max_retries: int = 3
    timeout_seconds: float = 30.0
    throttle_backoff_seconds: float = 10.0
    resign_on_retry: bool = True

    # Logging
    log_level: str = "INFO"
    log_dir: Optional[str] = None

    class Config:
        """Pydantic config."""

        env_file = ".env"
        case_sensitive = False
        extra = "ignore"


# Create a global settings instance
settings = Settings()
