"""
Content Source Module

Resolves an email identifier (local path, HTTP(S) URL or S3 URI) into the
raw bytes of the message. One attempt per call, no retries.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import httpx
import structlog

from mailjson.shared.exceptions import FetchError, NotFoundError
from mailjson.shared.tools.http import get_http_client
from mailjson.shared.tools.s3 import fetch_object

log = structlog.get_logger()

HTTP_SCHEMES = ("http://", "https://")
S3_SCHEME = "s3://"


class ContentOrigin(str, Enum):
    """Where raw email content came from."""
    
    LOCAL_PATH = "local_path"
    REMOTE_URL = "remote_url"
    S3_OBJECT = "s3_object"


@dataclass(frozen=True)
class RawContent:
    """Raw email bytes plus the identifier they were resolved from."""

    content: bytes
    origin: ContentOrigin
    identifier: str


def is_http_url(identifier: str) -> bool:
    return identifier.lower().startswith(HTTP_SCHEMES)


class ContentSource:
    """
    Resolve path-or-URL identifiers into raw email content.

    The HTTP client is injectable so callers (and tests) can control
    transport, timeouts and redirects.
    """

    def __init__(self, http_client: httpx.Client | None = None) -> None:
        self._http_client = http_client

    @property
    def http_client(self) -> httpx.Client:
        return self._http_client or get_http_client()

    def resolve(self, identifier: str) -> RawContent:
        """
        Fetch raw email content.

        Args:
            identifier: Local file path, http(s):// URL or s3:// URI

        Returns:
            RawContent with the email bytes

        Raises:
            NotFoundError: If a local file or S3 object does not exist
            FetchError: For any other retrieval failure
        """
        if is_http_url(identifier):
            return self._fetch_url(identifier)
        if identifier.lower().startswith(S3_SCHEME):
            return RawContent(
                content=fetch_object(identifier),
                origin=ContentOrigin.S3_OBJECT,
                identifier=identifier,
            )
        return self._read_file(identifier)

    def _fetch_url(self, url: str) -> RawContent:
        log.info("fetching_email_from_url", url=url)

        try:
            response = self.http_client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            log.error(
                "email_fetch_failed",
                url=url,
                status_code=e.response.status_code,
            )
            raise FetchError(
                identifier=url,
                error_message=f"HTTP {e.response.status_code}",
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            log.error("email_fetch_failed", url=url, error=str(e))
            raise FetchError(identifier=url, error_message=str(e)) from e

        log.debug("email_fetched_from_url", url=url, size_bytes=len(response.content))

        return RawContent(
            content=response.content,
            origin=ContentOrigin.REMOTE_URL,
            identifier=url,
        )

    def _read_file(self, path: str) -> RawContent:
        log.info("reading_email_from_path", path=path)

        try:
            content = Path(path).read_bytes()
        except FileNotFoundError as e:
            log.warning("email_file_not_found", path=path)
            raise NotFoundError(f"Email file not found: {path}", identifier=path) from e
        except OSError as e:
            log.error("email_read_failed", path=path, error=str(e))
            raise FetchError(identifier=path, error_message=str(e)) from e

        return RawContent(
            content=content,
            origin=ContentOrigin.LOCAL_PATH,
            identifier=path,
        )
