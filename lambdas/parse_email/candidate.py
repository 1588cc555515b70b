"""
Candidate Module

A discovered but not yet validated JSON payload, tagged with where it
came from, and the final extraction result carrying the same tag.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

# Pretty-printed JSON text for attachments, or the decoded value for links
JsonResult = str | dict[str, Any] | list[Any] | int | float | bool | None


class CandidateOrigin(str, Enum):
    """Where a candidate payload was found."""

    ATTACHMENT = "attachment"
    LINK = "link"


@dataclass(frozen=True)
class Candidate:
    """
    Unvalidated payload suspected of containing the target JSON.

    Attachment candidates carry `raw` bytes; link candidates carry the
    already-decoded `value`.
    """

    origin: CandidateOrigin
    raw: bytes | None = None
    value: Any = None
    source: str | None = None

    @classmethod
    def from_attachment(cls, content: bytes, filename: str | None = None) -> "Candidate":
        return cls(origin=CandidateOrigin.ATTACHMENT, raw=content, source=filename)

    @classmethod
    def from_link(cls, value: Any, url: str) -> "Candidate":
        return cls(origin=CandidateOrigin.LINK, value=value, source=url)


@dataclass(frozen=True)
class Extraction:
    """Formatted result of one pipeline run and the candidate it came from."""

    result: JsonResult
    origin: CandidateOrigin
    source: str | None = None

    def to_json_text(self) -> str:
        """
        Render the result as JSON text.

        Attachment results are already pretty-printed JSON; link values
        (a bare JSON string included) are serialised here.
        """
        if self.origin is CandidateOrigin.ATTACHMENT:
            return self.result
        return json.dumps(self.result, ensure_ascii=False)
