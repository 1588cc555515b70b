# Shared Tools
"""
Transport helpers for fetching emails and linked resources.
"""

from mailjson.shared.tools.http import (
    build_http_client,
    get_http_client,
    is_json_content_type,
    decode_json_body,
)
from mailjson.shared.tools.s3 import (
    parse_s3_uri,
    fetch_object,
)

__all__ = [
    # HTTP tools
    "build_http_client",
    "get_http_client",
    "is_json_content_type",
    "decode_json_body",
    # S3 tools
    "parse_s3_uri",
    "fetch_object",
]
