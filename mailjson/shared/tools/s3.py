"""
S3 Tools

Read-only access to raw emails stored in S3 by an SES receipt rule.
"""

from urllib.parse import urlparse

import boto3
from botocore.exceptions import ClientError
import structlog

from mailjson.shared.config import get_settings
from mailjson.shared.exceptions import FetchError, NotFoundError

log = structlog.get_logger()

_MISSING_ERROR_CODES = {"NoSuchKey", "NoSuchBucket", "404"}


def _get_client():
    """Get S3 client."""
    settings = get_settings()
    return boto3.client("s3", **settings.s3_config)


def parse_s3_uri(s3_uri: str) -> tuple[str, str]:
    """
    Parse an S3 URI into bucket and key.
    
    Args:
        s3_uri: S3 URI (s3://bucket/key)
        
    Returns:
        Tuple of (bucket, key)
        
    Raises:
        ValueError: If URI is invalid
    """
    parsed = urlparse(s3_uri)
    if parsed.scheme != "s3":
        raise ValueError(f"Invalid S3 URI scheme: {parsed.scheme}")
    
    bucket = parsed.netloc
    key = parsed.path.lstrip("/")
    
    if not bucket or not key:
        raise ValueError(f"S3 URI must name a bucket and a key: {s3_uri}")
    
    return bucket, key


def fetch_object(s3_uri: str) -> bytes:
    """
    Fetch an object's bytes from S3.
    
    Args:
        s3_uri: S3 URI (s3://bucket/key)
        
    Returns:
        Object content as bytes
        
    Raises:
        NotFoundError: If the bucket or key does not exist
        FetchError: If the URI is malformed or the download fails
    """
    try:
        bucket, key = parse_s3_uri(s3_uri)
    except ValueError as e:
        raise FetchError(identifier=s3_uri, error_message=str(e)) from e
    
    log.debug("fetching_s3_object", bucket=bucket, key=key)
    
    client = _get_client()
    
    try:
        response = client.get_object(Bucket=bucket, Key=key)
        content = response["Body"].read()
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code", "")
        
        if error_code in _MISSING_ERROR_CODES:
            log.warning("s3_object_not_found", bucket=bucket, key=key)
            raise NotFoundError(
                f"S3 object not found: {s3_uri}",
                identifier=s3_uri,
            ) from e
        
        log.error("s3_fetch_failed", bucket=bucket, key=key, error=str(e))
        raise FetchError(identifier=s3_uri, error_message=str(e)) from e
    
    log.debug(
        "s3_object_fetched",
        bucket=bucket,
        key=key,
        size_bytes=len(content),
    )
    
    return content
