"""
Models Package

Identifier types, caller input and typed API results.
"""

from ganjing.models.identifiers import (
    ChannelId,
    ContentId,
    ImageId,
    VideoId,
    get_web_url,
)
from ganjing.models.metadata import VideoMetadata
from ganjing.models.progress import ProgressCallback, ProgressReporter, UploadProgress
from ganjing.models.results import (
    CompleteUploadResult,
    ContentResult,
    RefreshTokenResponse,
    ThumbnailResult,
    UploadTokenResponse,
    VideoStatusResult,
    VideoUploadResult,
)

__all__ = [
    "ChannelId",
    "CompleteUploadResult",
    "ContentId",
    "ContentResult",
    "ImageId",
    "ProgressCallback",
    "ProgressReporter",
    "RefreshTokenResponse",
    "ThumbnailResult",
    "UploadProgress",
    "UploadTokenResponse",
    "VideoId",
    "VideoMetadata",
    "VideoStatusResult",
    "VideoUploadResult",
    "get_web_url",
]
