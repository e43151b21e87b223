"""
Parsing Package

Envelope checks and typed response parsing.
"""

from ganjing.parsing.envelope import (
    check_http_status,
    decode_response,
    load_payload,
    raise_for_application_error,
)
from ganjing.parsing.response_parser import (
    parse_content_result,
    parse_refresh_token,
    parse_thumbnail_result,
    parse_upload_token,
    parse_video_status,
    parse_video_upload_result,
)

__all__ = [
    "check_http_status",
    "decode_response",
    "load_payload",
    "parse_content_result",
    "parse_refresh_token",
    "parse_thumbnail_result",
    "parse_upload_token",
    "parse_video_status",
    "parse_video_upload_result",
    "raise_for_application_error",
]
