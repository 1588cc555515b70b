"""
Link Scanner Module

Finds URLs in the message body and fetches them one at a time, in order
of appearance, until one yields JSON. Failures on individual links are
logged and skipped; only exhaustion is reported (as None).
"""

import re
from typing import Any

import httpx
import structlog

from lambdas.parse_email.candidate import Candidate
from lambdas.parse_email.message_parser import ParsedMessage
from mailjson.shared.tools.http import (
    decode_json_body,
    get_http_client,
    is_json_content_type,
)

log = structlog.get_logger()

URL_PATTERN = re.compile(r"https?://\S+")


def find_urls(body: str | None) -> list[str]:
    """
    List every http(s) URL token in the body, in order, duplicates kept.

    A URL token is a contiguous run of non-whitespace characters starting
    with `http://` or `https://`.
    """
    if not body:
        return []
    return URL_PATTERN.findall(body)


class LinkScanner:
    """Fetch body links sequentially and return the first JSON one."""

    def __init__(self, http_client: httpx.Client | None = None) -> None:
        self._http_client = http_client

    @property
    def http_client(self) -> httpx.Client:
        return self._http_client or get_http_client()

    def scan(self, message: ParsedMessage) -> Candidate | None:
        """
        Scan body links for a JSON payload.

        Plain text is preferred; HTML is used only when there is no text
        body.

        Args:
            message: Parsed email

        Returns:
            Candidate for the first link yielding JSON, or None
        """
        body = message.body_text or message.body_html
        if not body:
            log.debug("no_body_to_scan")
            return None

        urls = find_urls(body)
        log.info("scanning_links", link_count=len(urls))

        for position, url in enumerate(urls):
            matched, value = self._evaluate(url, position)
            if matched:
                log.info("link_candidate_found", url=url, position=position)
                return Candidate.from_link(value, url)

        log.info("links_exhausted", link_count=len(urls))
        return None

    def _evaluate(self, url: str, position: int) -> tuple[bool, Any]:
        """
        Fetch one link and return `(matched, value)`.

        A declared JSON content type accepts any decoded value, `null`
        included; otherwise only objects and arrays count.
        """
        try:
            response = self.http_client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            log.warning(
                "link_fetch_failed",
                url=url,
                position=position,
                status_code=e.response.status_code,
            )
            return False, None
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            log.warning(
                "link_fetch_failed",
                url=url,
                position=position,
                error_type=type(e).__name__,
                error=str(e),
            )
            return False, None

        declared_json = is_json_content_type(response.headers.get("content-type"))

        try:
            value = decode_json_body(response)
        except ValueError as e:
            log.warning(
                "link_body_not_json",
                url=url,
                position=position,
                declared_json=declared_json,
                error=str(e),
            )
            return False, None

        if declared_json or isinstance(value, (dict, list)):
            return True, value

        log.debug(
            "link_body_not_structured",
            url=url,
            position=position,
            value_type=type(value).__name__,
        )
        return False, None
