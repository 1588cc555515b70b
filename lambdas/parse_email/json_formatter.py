"""
JSON Formatter Module

Validates a candidate and renders it as 2-space indented JSON.
Link candidates arrive already decoded and are passed through unchanged.
"""

import json

import structlog

from lambdas.parse_email.candidate import Candidate, CandidateOrigin, JsonResult
from mailjson.shared.exceptions import FormatError

log = structlog.get_logger()

JSON_INDENT = 2


class JsonFormatter:
    """Turn a candidate into the final JSON result."""

    def format(self, candidate: Candidate) -> JsonResult:
        """
        Validate and pretty-print a candidate.

        Args:
            candidate: Attachment or link candidate

        Returns:
            Indented JSON text for attachments, the decoded value for links

        Raises:
            FormatError: If attachment bytes are not UTF-8 JSON
        """
        if candidate.origin is CandidateOrigin.LINK:
            return candidate.value

        raw = candidate.raw or b""

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            log.error("attachment_not_utf8", source=candidate.source, error=str(e))
            raise FormatError(
                reason=f"invalid UTF-8 at byte {e.start}",
                source=candidate.source,
            ) from e

        try:
            value = json.loads(text)
        except json.JSONDecodeError as e:
            log.error(
                "attachment_not_json",
                source=candidate.source,
                line=e.lineno,
                column=e.colno,
                reason=e.msg,
            )
            raise FormatError(
                reason=e.msg,
                source=candidate.source,
                line=e.lineno,
                column=e.colno,
            ) from e
        except RecursionError as e:
            log.error("attachment_nesting_too_deep", source=candidate.source)
            raise FormatError(reason="nesting too deep", source=candidate.source) from e

        return json.dumps(value, indent=JSON_INDENT, ensure_ascii=False)
