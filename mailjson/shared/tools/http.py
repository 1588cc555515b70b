"""
HTTP Tools

httpx client construction and response helpers shared by the content
source and the link scanner.
"""

import json
from functools import lru_cache
from typing import Any

import httpx
import structlog

from mailjson.shared.config import Settings, get_settings

log = structlog.get_logger()

JSON_MEDIA_TYPE = "application/json"


def build_http_client(settings: Settings | None = None, **overrides: Any) -> httpx.Client:
    """
    Build an httpx client from settings.

    Args:
        settings: Settings to read timeout/redirect/User-Agent from
        **overrides: Extra httpx.Client kwargs (e.g. `transport` in tests)

    Returns:
        Configured httpx.Client
    """
    settings = settings or get_settings()
    config = {**settings.http_client_config, **overrides}
    return httpx.Client(**config)


@lru_cache(maxsize=1)
def get_http_client() -> httpx.Client:
    """Get the process-wide HTTP client built from cached settings."""
    return build_http_client()


def is_json_content_type(content_type: str | None) -> bool:
    """
    Check whether a Content-Type header declares JSON.

    Matches `application/json` and structured-syntax suffixes such as
    `application/problem+json`, ignoring parameters and case.
    """
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == JSON_MEDIA_TYPE or media_type.endswith("+json")


def decode_json_body(response: httpx.Response) -> Any:
    """
    Decode a response body as JSON.

    Raises:
        ValueError: If the body is not valid JSON (json.JSONDecodeError
            and UnicodeDecodeError are both ValueError subclasses) or is
            nested too deeply to decode
    """
    try:
        return json.loads(response.content)
    except RecursionError as e:
        raise ValueError("JSON nesting too deep") from e
