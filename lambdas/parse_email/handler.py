"""
ParseEmail Lambda Handler

Entry point behind an API Gateway proxy integration.

Routes:
    GET  ?emailFilePath=<path|url>  → JSON payload carried by the email
    POST <SES EmailEvent>           → delivery summaries per record
"""

import json
import logging
from typing import Any

import structlog
from pydantic import ValidationError

from lambdas.parse_email.pipeline import ExtractionPipeline, build_pipeline
from lambdas.parse_email.receipt_summary import summarize_email_event
from mailjson.shared.config import get_settings
from mailjson.shared.exceptions import (
    FetchError,
    FormatError,
    MailJsonError,
    NotFoundError,
)

# Configure structured logging
logging.basicConfig(format="%(message)s", level=get_settings().log_level)

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

log = structlog.get_logger()

EMAIL_PATH_PARAM = "emailFilePath"

_ERROR_STATUS: dict[type[MailJsonError], int] = {
    NotFoundError: 404,
    FormatError: 422,
    FetchError: 502,
}

_pipeline: ExtractionPipeline | None = None


def _get_pipeline() -> ExtractionPipeline:
    """Build the pipeline once per container."""
    global _pipeline
    if _pipeline is None:
        _pipeline = build_pipeline()
    return _pipeline


def _response(status_code: int, body: Any) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": body if isinstance(body, str) else json.dumps(body),
    }


def _error_response(error: MailJsonError) -> dict[str, Any]:
    status_code = _ERROR_STATUS.get(type(error), 500)
    return _response(
        status_code,
        {
            "error": error.message,
            "details": {k: v for k, v in error.context.items() if v is not None},
        },
    )


def _handle_get(event: dict[str, Any], request_id: str) -> dict[str, Any]:
    params = event.get("queryStringParameters") or {}
    identifier = params.get(EMAIL_PATH_PARAM)

    if not identifier:
        log.warning("missing_email_path", request_id=request_id)
        return _response(400, {"error": f"Missing query parameter '{EMAIL_PATH_PARAM}'"})

    try:
        extraction = _get_pipeline().execute(identifier)
    except MailJsonError as e:
        log.warning(
            "extraction_failed",
            request_id=request_id,
            identifier=identifier,
            error_type=type(e).__name__,
            error=str(e),
        )
        return _error_response(e)

    log.info(
        "extraction_succeeded",
        request_id=request_id,
        identifier=identifier,
        origin=extraction.origin.value,
    )

    return _response(200, extraction.to_json_text())


def _handle_post(event: dict[str, Any], request_id: str) -> dict[str, Any]:
    body = event.get("body") or "{}"

    try:
        payload = json.loads(body) if isinstance(body, str) else body
        summaries = summarize_email_event(payload)
    except json.JSONDecodeError as e:
        log.warning("request_body_not_json", request_id=request_id, error=str(e))
        return _response(400, {"error": "Request body is not valid JSON"})
    except ValidationError as e:
        log.warning("invalid_email_event", request_id=request_id, error_count=e.error_count())
        return _response(
            400,
            {
                "error": "Invalid SES email event",
                "details": e.errors(include_url=False, include_context=False, include_input=False),
            },
        )

    return _response(200, [summary.model_dump(by_alias=True) for summary in summaries])


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """
    AWS Lambda handler for email parsing requests.

    Args:
        event: API Gateway proxy event
        context: Lambda context

    Returns:
        API Gateway proxy response
    """
    request_id = getattr(context, "aws_request_id", "local")
    method = (event.get("httpMethod") or "GET").upper()

    log.info("processing_request", request_id=request_id, method=method)

    try:
        if method == "GET":
            return _handle_get(event, request_id)
        if method == "POST":
            return _handle_post(event, request_id)
    except Exception as e:
        log.error("lambda_handler_failed", request_id=request_id, error=str(e), exc_info=True)
        return _response(500, {"error": str(e)})

    log.warning("unsupported_method", request_id=request_id, method=method)
    return _response(405, {"error": f"Method {method} not allowed"})
