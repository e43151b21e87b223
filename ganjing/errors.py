"""
GanJing Errors

Exception hierarchy for the upload client. Every error carries an
ErrorKind so callers (a bulk upload supervisor, for example) can tell a
missing file from a network failure without string matching.

Nothing in this package retries: every error is raised straight to the
workflow caller.
"""

from typing import Any, Optional

from ganjing.constants import ErrorKind, ParseErrorKind


class GanJingError(Exception):
    """
    Base exception for all upload client errors.

    Attributes:
        kind: ErrorKind describing the failure category
    """

    def __init__(self, message: str, kind: ErrorKind):
        super().__init__(message)
        self.kind = kind


class MediaFileNotFoundError(GanJingError):
    """Local video or image file missing at the path the caller supplied"""

    def __init__(self, path: Any):
        super().__init__(f"File not found: {path}", ErrorKind.FILE_NOT_FOUND)
        self.path = str(path)


class MediaFileReadError(GanJingError):
    """Local file exists but could not be read (permissions, removed mid-read)"""

    def __init__(self, path: Any, reason: Any):
        super().__init__(f"Cannot read file {path}: {reason}", ErrorKind.FILE_UNREADABLE)
        self.path = str(path)


class ThumbnailRequiredError(GanJingError):
    """No usable thumbnail and automatic extraction is disabled"""

    def __init__(self, thumbnail_path: Any = ""):
        super().__init__(
            f"Thumbnail required but not provided: {thumbnail_path!s}",
            ErrorKind.THUMBNAIL_REQUIRED,
        )


class ExtractionUnavailableError(GanJingError):
    """Automatic thumbnail needed but the extraction tool is not installed"""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or (
                "No thumbnail provided and ffmpeg not available. "
                "Please provide a thumbnail or install ffmpeg."
            ),
            ErrorKind.EXTRACTION_UNAVAILABLE,
        )


class ExtractionError(GanJingError):
    """Extraction tool ran but did not produce a thumbnail"""

    def __init__(self, message: str):
        super().__init__(message, ErrorKind.EXTRACTION_FAILED)


class TransportError(GanJingError):
    """
    Network failure or non-success HTTP status.

    Attributes:
        status_code: HTTP status, or None when no response was received
        url: Request URL
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
    ):
        super().__init__(message, ErrorKind.TRANSPORT)
        self.status_code = status_code
        self.url = url


class ApplicationError(GanJingError):
    """
    HTTP success, but the platform reported a logical failure in the body.

    Attributes:
        code: Upstream error code (result_code, code or status_code)
        upstream_message: Upstream error message
    """

    def __init__(self, upstream_message: str, code: Any = None):
        detail = f" (code {code})" if code is not None else ""
        super().__init__(
            f"Platform error{detail}: {upstream_message}",
            ErrorKind.APPLICATION,
        )
        self.code = code
        self.upstream_message = upstream_message


class ParseError(GanJingError):
    """
    Response body could not be turned into a typed result.

    Attributes:
        parse_kind: ParseErrorKind
        field_path: Dotted path of the offending field or envelope key
    """

    def __init__(
        self,
        message: str,
        parse_kind: ParseErrorKind,
        field_path: Optional[str] = None,
    ):
        super().__init__(message, ErrorKind.PARSE)
        self.parse_kind = parse_kind
        self.field_path = field_path
