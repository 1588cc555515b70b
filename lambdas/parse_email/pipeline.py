"""
Extraction Pipeline Module

Orchestrates JSON discovery for one email in strict fallback order:

    content → parse → first attachment → body links → not found

The first attachment always wins. An attachment that is not valid JSON
is terminal: the pipeline does not fall back to links.
"""

from enum import Enum

import httpx
import structlog

from lambdas.parse_email.attachment_extractor import AttachmentExtractor
from lambdas.parse_email.candidate import Extraction, JsonResult
from lambdas.parse_email.content_source import ContentSource
from lambdas.parse_email.json_formatter import JsonFormatter
from lambdas.parse_email.link_scanner import LinkScanner
from lambdas.parse_email.message_parser import ParsedMessage, parse_message
from mailjson.shared.exceptions import FormatError, NotFoundError

log = structlog.get_logger()

NOT_FOUND_MESSAGE = "No JSON data found in the email."


class PipelineState(str, Enum):
    """Stages of a single extraction run."""

    START = "START"
    CONTENT_FETCHED = "CONTENT_FETCHED"
    ATTACHMENT_CHECKED = "ATTACHMENT_CHECKED"
    LINKS_CHECKED = "LINKS_CHECKED"
    DONE = "DONE"
    FAILED = "FAILED"


class ExtractionPipeline:
    """
    Stateless orchestrator for JSON discovery.

    Build once (see `build_pipeline`) and call `run` per request; all
    run state is local to the call.
    """

    def __init__(
        self,
        content_source: ContentSource,
        attachment_extractor: AttachmentExtractor,
        link_scanner: LinkScanner,
        formatter: JsonFormatter,
    ) -> None:
        self.content_source = content_source
        self.attachment_extractor = attachment_extractor
        self.link_scanner = link_scanner
        self.formatter = formatter

    def run(self, identifier: str) -> JsonResult:
        """
        Extract the JSON payload of the email at `identifier`.

        Args:
            identifier: Local path, http(s):// URL or s3:// URI of the email

        Returns:
            Pretty-printed JSON text (attachment) or decoded JSON value (link)

        Raises:
            NotFoundError: Email missing, or no JSON anywhere in it
            FetchError: Email content could not be retrieved
            FormatError: First attachment is not valid JSON
        """
        return self.execute(identifier).result

    def execute(self, identifier: str) -> Extraction:
        """Like `run`, but keep the origin of the result alongside it."""
        log.info("extraction_started", identifier=identifier)

        raw = self.content_source.resolve(identifier)
        message = parse_message(raw.content)
        self._transition(PipelineState.START, PipelineState.CONTENT_FETCHED, identifier)

        return self.extract(message, identifier=identifier)

    def extract(self, message: ParsedMessage, *, identifier: str | None = None) -> Extraction:
        """Run the attachment → links fallback on an already parsed message."""
        candidate = self.attachment_extractor.extract(message)
        if candidate is not None:
            # A bad attachment never falls back to links
            try:
                result = self.formatter.format(candidate)
            except FormatError:
                self._transition(PipelineState.CONTENT_FETCHED, PipelineState.FAILED, identifier)
                raise
            self._transition(PipelineState.CONTENT_FETCHED, PipelineState.DONE, identifier)
            return Extraction(result, candidate.origin, candidate.source)

        self._transition(
            PipelineState.CONTENT_FETCHED,
            PipelineState.ATTACHMENT_CHECKED,
            identifier,
        )

        candidate = self.link_scanner.scan(message)
        self._transition(
            PipelineState.ATTACHMENT_CHECKED,
            PipelineState.LINKS_CHECKED,
            identifier,
        )

        if candidate is not None:
            result = self.formatter.format(candidate)
            self._transition(PipelineState.LINKS_CHECKED, PipelineState.DONE, identifier)
            return Extraction(result, candidate.origin, candidate.source)

        self._transition(PipelineState.LINKS_CHECKED, PipelineState.FAILED, identifier)
        raise NotFoundError(NOT_FOUND_MESSAGE, identifier=identifier)

    @staticmethod
    def _transition(
        current: PipelineState,
        new: PipelineState,
        identifier: str | None,
    ) -> None:
        log.debug(
            "pipeline_transition",
            from_state=current.value,
            to_state=new.value,
            identifier=identifier,
        )


def build_pipeline(http_client: httpx.Client | None = None) -> ExtractionPipeline:
    """
    Build a pipeline sharing one HTTP client between its components.

    Args:
        http_client: Optional client override; defaults to the cached
            settings-based client
    """
    return ExtractionPipeline(
        content_source=ContentSource(http_client),
        attachment_extractor=AttachmentExtractor(),
        link_scanner=LinkScanner(http_client),
        formatter=JsonFormatter(),
    )
