# Shared Models
"""
Pydantic models for SES receipt events and delivery summaries.
"""

from mailjson.shared.models.ses import (
    Verdict,
    MailHeader,
    CommonHeaders,
    Mail,
    Receipt,
    SESPayload,
    SESRecord,
    EmailEvent,
    DeliverySummary,
)

__all__ = [
    # SES payload
    "Verdict",
    "MailHeader",
    "CommonHeaders",
    "Mail",
    "Receipt",
    "SESPayload",
    "SESRecord",
    "EmailEvent",
    # Output
    "DeliverySummary",
]
