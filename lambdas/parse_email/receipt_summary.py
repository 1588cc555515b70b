"""
Receipt Summary Module

Projects SES receipt notifications into flat delivery summaries:
verdict booleans, month sent, processing delay and address local parts.
"""

import calendar
from datetime import timezone
from typing import Any

import structlog

from mailjson.shared.models.ses import DeliverySummary, EmailEvent, SESRecord

log = structlog.get_logger()

# SES processing slower than this counts as delayed
DELAY_THRESHOLD_MILLIS = 1000


def email_local_part(address: str) -> str:
    """Return the part of an address before the first `@`."""
    return address.split("@", 1)[0]


def summarize_record(record: SESRecord) -> DeliverySummary:
    """Build the delivery summary for one SES record."""
    mail = record.ses.mail
    receipt = record.ses.receipt

    timestamp = mail.timestamp
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc)

    return DeliverySummary(
        spam_passed=receipt.spam_verdict.passed,
        virus_passed=receipt.virus_verdict.passed,
        dns_passed=(
            receipt.spf_verdict.passed
            and receipt.dkim_verdict.passed
            and receipt.dmarc_verdict.passed
        ),
        month=calendar.month_name[timestamp.month],
        delayed=receipt.processing_time_millis > DELAY_THRESHOLD_MILLIS,
        sender=email_local_part(mail.source),
        recipients=[email_local_part(dest) for dest in mail.destination],
    )


def summarize_email_event(event: EmailEvent | dict[str, Any]) -> list[DeliverySummary]:
    """
    Summarize every record of an SES email event.

    Args:
        event: EmailEvent model or its raw dict form

    Returns:
        One DeliverySummary per record, in record order

    Raises:
        pydantic.ValidationError: If a raw dict does not match the SES shape
    """
    if not isinstance(event, EmailEvent):
        event = EmailEvent.model_validate(event)

    summaries = [summarize_record(record) for record in event.records]

    log.info("email_event_summarized", record_count=len(summaries))

    return summaries
