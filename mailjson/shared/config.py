"""
Configuration Management

Pydantic-settings based configuration for the email JSON extractor.
All settings can be overridden via environment variables.
"""

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from mailjson import __version__


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    
    Environment variables are prefixed with MAILJSON_ and are case-insensitive.
    Example: MAILJSON_HTTP_TIMEOUT_SECONDS=10
    """
    
    model_config = SettingsConfigDict(
        env_prefix="MAILJSON_",
        env_file=[".env.local", ".env"],  # Try .env.local first
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # HTTP Configuration
    http_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Per-request timeout for remote fetches (None disables it)",
    )
    http_follow_redirects: bool = Field(
        default=True,
        description="Follow HTTP redirects when fetching emails and links",
    )
    http_user_agent: str = Field(
        default=f"mailjson/{__version__}",
        description="User-Agent header sent with every fetch",
    )
    
    # S3 Configuration
    s3_endpoint_url: str | None = Field(
        default=None,
        description="S3 endpoint URL (for local development)",
    )
    
    # AWS Configuration
    aws_region: str = Field(
        default="us-west-2",
        description="AWS region",
    )
    
    # Application Configuration
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )
    
    @property
    def s3_config(self) -> dict:
        """S3 client configuration."""
        config = {"region_name": self.aws_region}
        if self.s3_endpoint_url and self.s3_endpoint_url != "mock":
            config["endpoint_url"] = self.s3_endpoint_url
        return config
    
    @property
    def http_client_config(self) -> dict[str, Any]:
        """httpx.Client configuration."""
        return {
            "timeout": self.http_timeout_seconds,
            "follow_redirects": self.http_follow_redirects,
            "headers": {"User-Agent": self.http_user_agent},
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached application settings.
    
    Uses lru_cache to ensure settings are loaded only once.
    Call Settings.model_validate({}) in tests to override.
    """
    return Settings()
