"""
ParseEmail Lambda

Extracts the JSON payload carried by an inbound email and summarizes
SES delivery verdicts.

Flow:
    Email identifier (path / URL / S3 URI)
    → ContentSource
    → parse_message
    → AttachmentExtractor (first attachment wins)
    → LinkScanner (first JSON link wins)
    → JsonFormatter
"""

from lambdas.parse_email.attachment_extractor import AttachmentExtractor
from lambdas.parse_email.candidate import (
    Candidate,
    CandidateOrigin,
    Extraction,
    JsonResult,
)
from lambdas.parse_email.content_source import ContentOrigin, ContentSource, RawContent
from lambdas.parse_email.json_formatter import JsonFormatter
from lambdas.parse_email.link_scanner import LinkScanner, find_urls
from lambdas.parse_email.message_parser import (
    MessageAttachment,
    ParsedMessage,
    parse_message,
)
from lambdas.parse_email.pipeline import (
    ExtractionPipeline,
    PipelineState,
    build_pipeline,
)
from lambdas.parse_email.receipt_summary import summarize_email_event

__all__ = [
    "AttachmentExtractor",
    "Candidate",
    "CandidateOrigin",
    "ContentOrigin",
    "ContentSource",
    "Extraction",
    "ExtractionPipeline",
    "JsonFormatter",
    "JsonResult",
    "LinkScanner",
    "MessageAttachment",
    "ParsedMessage",
    "PipelineState",
    "RawContent",
    "build_pipeline",
    "find_urls",
    "parse_message",
    "summarize_email_event",
]
