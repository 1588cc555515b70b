"""
Custom Exceptions for the Email JSON Extractor

All exceptions follow the pattern of specific, actionable errors
with context needed for debugging and logging.
"""

from typing import Any


class MailJsonError(Exception):
    """Base exception for the email JSON extractor."""
    
    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(message)
    
    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class NotFoundError(MailJsonError):
    """
    Requested content does not exist.

    Raised for a missing local file or S3 object, and when no JSON
    payload could be discovered anywhere in an email.
    """
    
    def __init__(self, message: str, identifier: str | None = None) -> None:
        self.identifier = identifier
        if identifier is None:
            super().__init__(message)
        else:
            super().__init__(message, identifier=identifier)


class FetchError(MailJsonError):
    """Retrieving the email content failed for a reason other than absence."""
    
    def __init__(
        self,
        identifier: str,
        error_message: str | None = None,
    ) -> None:
        self.identifier = identifier
        self.error_message = error_message
        super().__init__(
            f"Failed to fetch '{identifier}': {error_message or 'Unknown error'}",
            identifier=identifier,
        )


class FormatError(MailJsonError):
    """Attachment content is not valid JSON."""
    
    def __init__(
        self,
        reason: str,
        source: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.reason = reason
        self.source = source
        self.line = line
        self.column = column
        super().__init__(
            f"Attachment is not valid JSON: {reason}",
            source=source,
            line=line,
            column=column,
        )
