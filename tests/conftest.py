"""
Pytest Configuration and Shared Fixtures

Provides raw email samples, httpx mock clients and moto S3 mocking.
"""

import json
import os
from typing import Any

import boto3
import httpx
import pytest
from moto import mock_aws

# Set test environment before importing application modules
os.environ["MAILJSON_ENVIRONMENT"] = "development"
os.environ["MAILJSON_AWS_REGION"] = "us-west-2"
os.environ["MAILJSON_LOG_LEVEL"] = "DEBUG"
os.environ["AWS_DEFAULT_REGION"] = "us-west-2"
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"

from tests.utils.http_mocks import RecordingTransport, Route
from tests.utils.mail_builder import build_email


# --- HTTP Fixtures ---


@pytest.fixture
def make_http_client():
    """
    Factory building an httpx client backed by a RecordingTransport.

    Returns (client, transport); the transport records requested URLs.
    """
    clients: list[httpx.Client] = []

    def _make(routes: dict[str, Route]) -> tuple[httpx.Client, RecordingTransport]:
        transport = RecordingTransport(routes)
        client = httpx.Client(transport=transport, follow_redirects=True)
        clients.append(client)
        return client, transport

    yield _make

    for client in clients:
        client.close()


# --- Email Fixtures ---


@pytest.fixture
def sample_payload() -> dict[str, Any]:
    """JSON payload carried by sample emails."""
    return {"invoice": "INV-2025-001", "total": 1250.5, "items": [{"sku": "A1", "qty": 2}]}


@pytest.fixture
def email_with_json_attachment(sample_payload: dict[str, Any]) -> bytes:
    """Email whose first attachment is a JSON document."""
    return build_email(
        text="See attached. Also https://links.example.com/ignored.json",
        attachments=[
            ("invoice.json", json.dumps(sample_payload).encode(), "application/json"),
            ("notes.bin", b"not json", "application/octet-stream"),
        ],
    )


@pytest.fixture
def email_without_body() -> bytes:
    """Headers-only email with no body and no attachments."""
    return (
        b"From: reports@example.com\r\n"
        b"To: inbox@example.com\r\n"
        b"Subject: empty\r\n"
        b"\r\n"
    )


# --- AWS Mocking Fixtures ---


@pytest.fixture
def aws_credentials():
    """Mock AWS credentials for moto."""
    return {
        "aws_access_key_id": "testing",
        "aws_secret_access_key": "testing",
        "region_name": "us-west-2",
    }


@pytest.fixture
def mock_s3(aws_credentials):
    """Create a mocked S3 bucket for stored inbound emails."""
    with mock_aws():
        s3 = boto3.client("s3", **aws_credentials)
        s3.create_bucket(
            Bucket="test-inbound-emails",
            CreateBucketConfiguration={"LocationConstraint": "us-west-2"},
        )
        yield s3


# --- SES Event Fixtures ---


@pytest.fixture
def ses_record() -> dict[str, Any]:
    """Single SES receipt record as delivered by a receipt rule."""
    return {
        "eventSource": "aws:ses",
        "eventVersion": "1.0",
        "ses": {
            "mail": {
                "timestamp": "2025-02-06T15:30:00.000Z",
                "source": "john.smith@techservices.com",
                "messageId": "o3vrnil0e2ic28trm7dfhrc2v0clambda4nbp0g01",
                "destination": ["reports@example.com", "billing@example.com"],
                "headersTruncated": False,
                "headers": [{"name": "From", "value": "john.smith@techservices.com"}],
                "commonHeaders": {
                    "returnPath": "john.smith@techservices.com",
                    "from": ["John Smith <john.smith@techservices.com>"],
                    "to": ["reports@example.com"],
                    "messageId": "<abc123@mail.techservices.com>",
                    "subject": "February invoice",
                },
            },
            "receipt": {
                "timestamp": "2025-02-06T15:30:00.500Z",
                "processingTimeMillis": 574,
                "recipients": ["reports@example.com"],
                "spamVerdict": {"status": "PASS"},
                "virusVerdict": {"status": "PASS"},
                "spfVerdict": {"status": "PASS"},
                "dkimVerdict": {"status": "PASS"},
                "dmarcVerdict": {"status": "PASS"},
                "dmarcPolicy": "reject",
                "action": {
                    "type": "Lambda",
                    "functionArn": "arn:aws:lambda:us-west-2:123456789012:function:parse-email",
                    "invocationType": "Event",
                },
            },
        },
    }


@pytest.fixture
def ses_email_event(ses_record: dict[str, Any]) -> dict[str, Any]:
    """SES email event wrapping one record."""
    return {"Records": [ses_record]}
