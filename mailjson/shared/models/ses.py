"""
SES Receipt Models

Pydantic models for the SES inbound-email notification payload
(`Records[].ses.{mail, receipt}`) and the flat delivery summary
derived from it.
"""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _SESModel(BaseModel):
    """Base for SES payload models: camelCase on the wire, snake_case in code."""
    
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class Verdict(_SESModel):
    """A single pass/fail check performed by SES."""
    
    status: str = Field(..., description="PASS, FAIL, GRAY or PROCESSING_FAILED")
    
    @property
    def passed(self) -> bool:
        return self.status == "PASS"


class MailHeader(_SESModel):
    name: str
    value: str


class CommonHeaders(_SESModel):
    """Subset of headers SES lifts out of the message."""
    
    return_path: str | None = None
    from_: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("from", "from_"),
        serialization_alias="from",
    )
    to: list[str] = Field(default_factory=list)
    date: str | None = None
    message_id: str | None = None
    subject: str | None = None


class Mail(_SESModel):
    """Information about the received message."""
    
    timestamp: datetime
    source: str
    message_id: str
    destination: list[str] = Field(default_factory=list)
    headers_truncated: bool = False
    headers: list[MailHeader] = Field(default_factory=list)
    common_headers: CommonHeaders | None = None


class Receipt(_SESModel):
    """SES receipt metadata, including all verdicts."""
    
    timestamp: datetime
    processing_time_millis: int = Field(..., ge=0)
    recipients: list[str] = Field(default_factory=list)
    spam_verdict: Verdict
    virus_verdict: Verdict
    spf_verdict: Verdict
    dkim_verdict: Verdict
    dmarc_verdict: Verdict
    dmarc_policy: str | None = None
    action: dict[str, Any] = Field(default_factory=dict)


class SESPayload(_SESModel):
    mail: Mail
    receipt: Receipt


class SESRecord(_SESModel):
    event_source: str | None = None
    event_version: str | None = None
    ses: SESPayload


class EmailEvent(BaseModel):
    """Top-level SES event as delivered to a receipt-rule action."""
    
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")
    
    records: list[SESRecord] = Field(
        default_factory=list,
        validation_alias=AliasChoices("Records", "records"),
        serialization_alias="Records",
    )


class DeliverySummary(BaseModel):
    """
    Flat projection of one SES receipt.

    Serialised with its wire keys (`spam`, `virus`, `dns`, `mes`,
    `retrasado`, `emisor`, `receptor`); use `model_dump(by_alias=True)`.
    """
    
    model_config = ConfigDict(populate_by_name=True, frozen=True)
    
    spam_passed: bool = Field(..., alias="spam", description="Spam check passed")
    virus_passed: bool = Field(..., alias="virus", description="Virus check passed")
    dns_passed: bool = Field(
        ...,
        alias="dns",
        description="SPF, DKIM and DMARC all passed",
    )
    month: str = Field(..., alias="mes", description="Month the mail was sent")
    delayed: bool = Field(
        ...,
        alias="retrasado",
        description="Processing took longer than one second",
    )
    sender: str = Field(..., alias="emisor", description="Sender local part")
    recipients: list[str] = Field(
        default_factory=list,
        alias="receptor",
        description="Recipient local parts",
    )
