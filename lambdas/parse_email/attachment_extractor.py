"""
Attachment Extractor Module

Picks the JSON candidate carried as an attachment. Only the first
attachment is ever considered; validation is left to the formatter.
"""

import structlog

from lambdas.parse_email.candidate import Candidate
from lambdas.parse_email.message_parser import ParsedMessage

log = structlog.get_logger()


class AttachmentExtractor:
    """Select the first attachment of a message as a candidate."""

    def extract(self, message: ParsedMessage) -> Candidate | None:
        """
        Return the first attachment as a candidate.

        Later attachments are never inspected, even when the first one
        is empty.

        Args:
            message: Parsed email

        Returns:
            Candidate, or None if there is no usable first attachment
        """
        if not message.attachments:
            return None

        first = message.attachments[0]
        if not first.content:
            log.debug("first_attachment_empty", filename=first.filename)
            return None

        log.info(
            "attachment_candidate_found",
            filename=first.filename,
            content_type=first.content_type,
            size_bytes=first.size_bytes,
        )
        return Candidate.from_attachment(first.content, first.filename)
