"""
Response Parser

Turns raw response bodies into typed results, one function per endpoint.

Every function accepts raw bytes/str or an already decoded mapping, checks
the envelope key ("data" or "body" depending on the endpoint), checks the
fields the result type requires, and either returns a fully populated
result or raises ParseError. No partial results, no logging.
"""

from typing import Any, Dict, Mapping, Optional

from ganjing.constants import (
    THUMBNAIL_MARKER_672,
    THUMBNAIL_MARKER_1280,
    THUMBNAIL_MARKER_1920,
    ParseErrorKind,
    ProcessingStatus,
)
from ganjing.errors import ParseError
from ganjing.models.identifiers import ChannelId, ContentId, ImageId, VideoId
from ganjing.models.results import (
    ContentResult,
    RefreshTokenResponse,
    ThumbnailResult,
    UploadTokenResponse,
    VideoStatusResult,
    VideoUploadResult,
)
from ganjing.parsing.envelope import RawBody, load_payload

_MISSING = object()

_STATUS_BY_VALUE = {status.value: status for status in ProcessingStatus}


# =============================================================================
# FIELD HELPERS
# =============================================================================


def _envelope(payload: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    """Return payload[key], which must be an object"""
    section = payload.get(key, _MISSING)
    if section is _MISSING:
        raise ParseError(
            f"Missing required field: {key}",
            ParseErrorKind.MALFORMED_ENVELOPE,
            field_path=key,
        )
    if not isinstance(section, Mapping):
        raise ParseError(
            f"Expected '{key}' to be an object, got {type(section).__name__}",
            ParseErrorKind.MALFORMED_ENVELOPE,
            field_path=key,
        )
    return section


def _require(section: Mapping[str, Any], key: str, path: str) -> Any:
    value = section.get(key, _MISSING)
    if value is _MISSING or value is None:
        raise ParseError(
            f"Missing required field: {path}.{key}",
            ParseErrorKind.MISSING_FIELD,
            field_path=f"{path}.{key}",
        )
    return value


def _as_str(value: Any, field_path: str) -> str:
    if isinstance(value, str):
        return value
    # Ids occasionally come back as numbers
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ParseError(
        f"Expected string for {field_path}, got {type(value).__name__}",
        ParseErrorKind.INVALID_VALUE,
        field_path=field_path,
    )


def _as_int(value: Any, field_path: str) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ParseError(
        f"Expected integer for {field_path}, got {value!r}",
        ParseErrorKind.INVALID_VALUE,
        field_path=field_path,
    )


def _as_float(value: Any, field_path: str) -> float:
    # duration_sec is transmitted as a string, e.g. "12.345"
    if isinstance(value, bool):
        value = None
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ParseError(
            f"Expected number for {field_path}, got {value!r}",
            ParseErrorKind.INVALID_VALUE,
            field_path=field_path,
        ) from e


def _as_sizes(value: Any, field_path: str) -> str:
    """Thumbnail sizes as a comma separated string ("140,240,...")"""
    if isinstance(value, list):
        return ",".join(_as_str(item, field_path) for item in value)
    return _as_str(value, field_path)


def _required_str(section: Mapping[str, Any], key: str, path: str) -> str:
    return _as_str(_require(section, key, path), f"{path}.{key}")


def _optional(section: Mapping[str, Any], key: str, path: str, convert) -> Optional[Any]:
    value = section.get(key)
    if value is None:
        return None
    return convert(value, f"{path}.{key}")


# =============================================================================
# AUTH
# =============================================================================


def parse_upload_token(body: RawBody) -> UploadTokenResponse:
    """
    Parse the get-vod-token response.

    Expected shape: {"data": {"token": "..."}}
    """
    payload = load_payload(body, "upload token response")
    data = _envelope(payload, "data")
    return UploadTokenResponse(token=_required_str(data, "token", "data"))


def parse_refresh_token(body: RawBody) -> RefreshTokenResponse:
    """
    Parse the auth/refresh response.

    Expected shape: {"data": {"user_id", "token", "refresh_token"}}
    """
    payload = load_payload(body, "refresh token response")
    data = _envelope(payload, "data")
    return RefreshTokenResponse(
        user_id=_required_str(data, "user_id", "data"),
        token=_required_str(data, "token", "data"),
        refresh_token=_required_str(data, "refresh_token", "data"),
    )


# =============================================================================
# THUMBNAIL
# =============================================================================


def parse_thumbnail_result(body: RawBody) -> ThumbnailResult:
    """
    Parse the image upload response.

    The 672/1280/1920 convenience URLs are picked in a single pass over
    image_url by substring match; a missing size leaves its slot empty.
    """
    payload = load_payload(body, "thumbnail response")
    section = _envelope(payload, "body")

    image_id = ImageId(_required_str(section, "image_id", "body"))
    filename = _required_str(section, "filename", "body")

    raw_urls = _require(section, "image_url", "body")
    if not isinstance(raw_urls, list):
        raise ParseError(
            "Expected list for body.image_url",
            ParseErrorKind.INVALID_VALUE,
            field_path="body.image_url",
        )

    urls = []
    slots: Dict[str, str] = {}
    for index, raw_url in enumerate(raw_urls):
        url = _as_str(raw_url, f"body.image_url[{index}]")
        urls.append(url)

        if THUMBNAIL_MARKER_672 in url:
            slots.setdefault("672", url)
        elif THUMBNAIL_MARKER_1280 in url:
            slots.setdefault("1280", url)
        elif THUMBNAIL_MARKER_1920 in url:
            slots.setdefault("1920", url)

    analyzed_score = None
    score = section.get("analyzed_score")
    if score is not None:
        if not isinstance(score, Mapping):
            raise ParseError(
                "Expected object for body.analyzed_score",
                ParseErrorKind.INVALID_VALUE,
                field_path="body.analyzed_score",
            )
        analyzed_score = _as_float(
            _require(score, "raw_score", "body.analyzed_score"),
            "body.analyzed_score.raw_score",
        )

    return ThumbnailResult(
        image_id=image_id,
        filename=filename,
        all_urls=tuple(urls),
        url_672=slots.get("672", ""),
        url_1280=slots.get("1280", ""),
        url_1920=slots.get("1920", ""),
        analyzed_score=analyzed_score,
        extension=_optional(section, "extension", "body", _as_str),
    )


# =============================================================================
# CONTENT
# =============================================================================


def parse_content_result(body: RawBody) -> ContentResult:
    """Parse the add-content (draft creation) response"""
    payload = load_payload(body, "content response")
    data = _envelope(payload, "data")

    return ContentResult(
        content_id=ContentId(_required_str(data, "id", "data")),
        owner_id=ChannelId(_required_str(data, "owner_id", "data")),
        video_type=_required_str(data, "type", "data"),
        category_id=_required_str(data, "category_id", "data"),
        slug=_required_str(data, "slug", "data"),
        title=_required_str(data, "title", "data"),
        description=_required_str(data, "description", "data"),
        visibility=_required_str(data, "visibility", "data"),
        poster_url=_required_str(data, "poster_url", "data"),
        poster_hd_url=_required_str(data, "poster_hd_url", "data"),
        created_at=_optional(data, "created_at", "data", _as_int),
        time_scheduled=_optional(data, "time_scheduled", "data", _as_int),
        view_count=_optional(data, "view_count", "data", _as_int),
        like_count=_optional(data, "like_count", "data", _as_int),
        save_count=_optional(data, "save_count", "data", _as_int),
        comment_count=_optional(data, "comment_count", "data", _as_int),
    )


# =============================================================================
# VIDEO
# =============================================================================


def parse_video_upload_result(body: RawBody) -> VideoUploadResult:
    """Parse the video upload response"""
    payload = load_payload(body, "video upload response")
    section = _envelope(payload, "body")

    return VideoUploadResult(
        video_id=VideoId(_required_str(section, "video_id", "body")),
        filename=_required_str(section, "filename", "body"),
    )


def parse_video_status(body: RawBody) -> VideoStatusResult:
    """
    Parse the video status response.

    The platform drops the "status" key once transcoding has finished, so an
    absent status means PROCESSED at 100%. This is observed upstream
    behaviour, not a documented contract.
    """
    payload = load_payload(body, "video status response")
    section = _envelope(payload, "body")

    video_id = VideoId(_required_str(section, "video_id", "body"))
    filename = _required_str(section, "filename", "body")

    if "status" in section:
        raw_status = section["status"]
        if isinstance(raw_status, str):
            status = _STATUS_BY_VALUE.get(raw_status, ProcessingStatus.UNKNOWN)
        else:
            status = ProcessingStatus.UNKNOWN
        progress = _optional(section, "progress", "body", _as_int) or 0
    else:
        status = ProcessingStatus.PROCESSED
        progress = 100

    thumb_base_url = None
    thumb_sizes = None
    thumb = section.get("thumb")
    if thumb is not None:
        if not isinstance(thumb, Mapping):
            raise ParseError(
                "Expected object for body.thumb",
                ParseErrorKind.INVALID_VALUE,
                field_path="body.thumb",
            )
        thumb_base_url = _required_str(thumb, "base_url", "body.thumb")
        thumb_sizes = _as_sizes(_require(thumb, "sizes", "body.thumb"), "body.thumb.sizes")

    return VideoStatusResult(
        video_id=video_id,
        filename=filename,
        status=status,
        progress=progress,
        url=_optional(section, "url", "body", _as_str),
        duration_sec=_optional(section, "duration_sec", "body", _as_float),
        width=_optional(section, "width", "body", _as_int),
        height=_optional(section, "height", "body", _as_int),
        loudness=_optional(section, "loudness", "body", _as_str),
        thumb_base_url=thumb_base_url,
        thumb_sizes=thumb_sizes,
    )
