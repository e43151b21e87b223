"""
Result Models

Typed results produced by the response parser, one per endpoint, plus the
aggregate returned by the high-level upload workflow.

All results are frozen: they are built once from a response body and never
modified afterwards. Fields the platform may omit are Optional and None
when absent. The thumbnail convenience URLs are the one exception: they
hold "" when no matching size was generated.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ganjing.constants import ProcessingStatus, UploadPhase
from ganjing.models.identifiers import ChannelId, ContentId, ImageId, VideoId


@dataclass(frozen=True)
class UploadTokenResponse:
    """Short-lived token for the image/video upload services"""

    token: str


@dataclass(frozen=True)
class RefreshTokenResponse:
    """New access/refresh token pair"""

    user_id: str
    token: str  # New access token
    refresh_token: str


@dataclass(frozen=True)
class ThumbnailResult:
    """
    Result of a thumbnail upload.

    The three convenience URLs are picked out of all_urls by their size
    marker; each stays "" when no URL carried the marker.
    """

    image_id: ImageId
    filename: str
    all_urls: Tuple[str, ...]
    url_672: str = ""  # Standard poster
    url_1280: str = ""  # HD poster
    url_1920: str = ""  # Full HD poster
    analyzed_score: Optional[float] = None
    extension: Optional[str] = None


@dataclass(frozen=True)
class ContentResult:
    """Result of draft creation"""

    content_id: ContentId
    owner_id: ChannelId
    video_type: str
    category_id: str
    slug: str
    title: str
    description: str
    visibility: str
    poster_url: str
    poster_hd_url: str

    # Timestamps in milliseconds since epoch
    created_at: Optional[int] = None
    time_scheduled: Optional[int] = None

    # Engagement counters (initialized server-side)
    view_count: Optional[int] = None
    like_count: Optional[int] = None
    save_count: Optional[int] = None
    comment_count: Optional[int] = None


@dataclass(frozen=True)
class VideoUploadResult:
    """Result of a video file upload"""

    video_id: VideoId
    filename: str


@dataclass(frozen=True)
class VideoStatusResult:
    """
    Processing status of an uploaded video.

    Stream details (url, duration, dimensions, loudness, thumbnails) are
    only sent once the video is processed.
    """

    video_id: VideoId
    filename: str
    status: ProcessingStatus
    progress: int = 0  # 0-100

    url: Optional[str] = None
    duration_sec: Optional[float] = None
    width: Optional[int] = None
    height: Optional[int] = None
    loudness: Optional[str] = None
    thumb_base_url: Optional[str] = None
    thumb_sizes: Optional[str] = None

    @property
    def is_processed(self) -> bool:
        return self.status == ProcessingStatus.PROCESSED

    @property
    def is_failed(self) -> bool:
        return self.status == ProcessingStatus.FAILED

    @property
    def is_terminal(self) -> bool:
        """True once polling can stop (processed or failed)"""
        return self.is_processed or self.is_failed


@dataclass(frozen=True)
class CompleteUploadResult:
    """
    Everything the full upload workflow produced.

    Quick-access ids are copied out of the step results; the step results
    themselves are kept whole so no metadata is lost.

    A current_phase other than COMPLETED (CHECKING_STATUS) means the
    workflow only took a status snapshot instead of waiting. Check
    processed_status.is_terminal to detect a polling timeout.
    """

    # Quick access
    content_id: ContentId
    video_id: VideoId
    image_id: ImageId
    web_url: str

    # Full step results
    thumbnail_result: ThumbnailResult
    content_result: ContentResult
    video_result: VideoUploadResult
    processed_status: VideoStatusResult

    current_phase: UploadPhase
    video_url: Optional[str] = None  # Stream URL once processed
    completed_at: Optional[int] = None  # Unix timestamp
