"""
Message Parser Module

Decodes raw MIME email into the structured view the extraction pipeline
works on: plain-text body, HTML body and the ordered attachment list.
"""

import email
import re
from dataclasses import dataclass, field
from email.message import EmailMessage
from email.policy import default as default_policy

import structlog

log = structlog.get_logger()


@dataclass
class MessageAttachment:
    """Raw attachment data from email parse."""

    content: bytes
    filename: str | None = None
    content_type: str = "application/octet-stream"

    @property
    def size_bytes(self) -> int:
        return len(self.content)


@dataclass
class ParsedMessage:
    """Result of parsing an inbound email."""

    body_text: str | None = None
    body_html: str | None = None

    # Order is significant: only the first attachment is a JSON candidate
    attachments: list[MessageAttachment] = field(default_factory=list)

    # Header metadata, for logging
    subject: str = ""
    from_address: str = ""
    message_id: str = ""

    # Parsing metadata
    parse_errors: list[str] = field(default_factory=list)

    @property
    def has_body(self) -> bool:
        return bool(self.body_text or self.body_html)


def _extract_address(header_value: str | None) -> str:
    """
    Extract email address from a header value.

    Handles formats like:
    - "John Doe <john@example.com>"
    - "<john@example.com>"
    - "john@example.com"
    """
    if not header_value:
        return ""

    match = re.search(r"<([^>]+)>", header_value)
    if match:
        return match.group(1).strip()

    return header_value.strip()


def _decode_part(part: EmailMessage) -> str | None:
    """Decode a text part's payload using its declared charset."""
    payload = part.get_payload(decode=True)
    if not payload:
        return None

    charset = part.get_content_charset() or "utf-8"
    try:
        return payload.decode(charset, errors="replace")
    except (LookupError, UnicodeDecodeError):
        return payload.decode("utf-8", errors="replace")


def _is_attachment(part: EmailMessage) -> bool:
    """A part is an attachment if marked so or if it carries a filename."""
    if part.is_multipart():
        return False
    if part.get_content_disposition() == "attachment":
        return True
    return part.get_filename() is not None


def _walk_parts(msg: EmailMessage) -> tuple[str | None, str | None, list[MessageAttachment]]:
    """
    Split a message into bodies and attachments.

    The first non-attachment text/plain and text/html parts become the
    bodies; every attachment is kept in document order.
    """
    body_text: str | None = None
    body_html: str | None = None
    attachments: list[MessageAttachment] = []

    for part in msg.walk():
        if part.is_multipart():
            continue

        content_type = part.get_content_type()

        if _is_attachment(part):
            attachments.append(
                MessageAttachment(
                    content=part.get_payload(decode=True) or b"",
                    filename=part.get_filename(),
                    content_type=content_type,
                )
            )
            log.debug(
                "extracted_attachment",
                filename=part.get_filename(),
                content_type=content_type,
            )
            continue

        if content_type == "text/plain" and body_text is None:
            body_text = _decode_part(part)
        elif content_type == "text/html" and body_html is None:
            body_html = _decode_part(part)

    return body_text, body_html, attachments


def parse_message(raw_email: str | bytes) -> ParsedMessage:
    """
    Parse raw email content (MIME format) into a ParsedMessage.

    Parsing never raises: a message the MIME decoder rejects yields an
    empty ParsedMessage with the failure recorded in `parse_errors`.

    Args:
        raw_email: Raw email content as string or bytes

    Returns:
        ParsedMessage with bodies and ordered attachments
    """
    raw_bytes = raw_email.encode("utf-8") if isinstance(raw_email, str) else raw_email

    try:
        msg = email.message_from_bytes(raw_bytes, policy=default_policy)
        body_text, body_html, attachments = _walk_parts(msg)
    except Exception as e:
        log.error("email_parse_failed", error=str(e))
        return ParsedMessage(parse_errors=[f"Failed to parse email: {e}"])

    parse_errors: list[str] = []
    if body_text is None and body_html is None:
        parse_errors.append("Could not extract email body")

    result = ParsedMessage(
        body_text=body_text,
        body_html=body_html,
        attachments=attachments,
        subject=str(msg.get("Subject", "") or ""),
        from_address=_extract_address(str(msg.get("From", "") or "")),
        message_id=str(msg.get("Message-ID", "") or ""),
        parse_errors=parse_errors,
    )

    log.debug(
        "email_parsed",
        message_id=result.message_id,
        has_text=body_text is not None,
        has_html=body_html is not None,
        attachment_count=len(attachments),
    )

    return result
