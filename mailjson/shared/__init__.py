# Shared Infrastructure
"""
Shared infrastructure components for the email JSON extractor.

This package provides:
- Pydantic models for SES receipt events
- Transport helpers for HTTP and S3
- Configuration management
- Custom exceptions
"""

from mailjson.shared.exceptions import (
    MailJsonError,
    NotFoundError,
    FetchError,
    FormatError,
)
from mailjson.shared.config import Settings, get_settings

__all__ = [
    # Exceptions
    "MailJsonError",
    "NotFoundError",
    "FetchError",
    "FormatError",
    # Config
    "Settings",
    "get_settings",
]
