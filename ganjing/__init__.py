"""
GanJing Uploader

Async upload client for the GanJing World video platform.

Public API:
    - UploadController: High-level upload workflow
    - GanJingClient: Step-level API (thumbnail, draft, video, status)
    - VideoMetadata, Category, Visibility: Draft input
    - ChannelId, ContentId, VideoId, ImageId: Identifier types
    - CompleteUploadResult, UploadProgress: Workflow output
    - GanJingError (and subclasses): Failures, tagged with ErrorKind
    - create_client, create_extractor: Factory functions

Usage:
    from ganjing import ChannelId, UploadController, VideoMetadata

    async with UploadController() as controller:
        result = await controller.upload(
            "video.mp4",
            ChannelId("your_channel_id"),
            VideoMetadata(title="My Video", description="Uploaded from Python"),
        )
        print(result.web_url)
"""

from ganjing.client import GanJingClient
from ganjing.constants import (
    Category,
    ErrorKind,
    ParseErrorKind,
    ProcessingStatus,
    UploadPhase,
    Visibility,
)
from ganjing.controllers.upload_controller import UploadAssets, UploadController
from ganjing.errors import (
    ApplicationError,
    ExtractionError,
    ExtractionUnavailableError,
    GanJingError,
    MediaFileNotFoundError,
    MediaFileReadError,
    ParseError,
    ThumbnailRequiredError,
    TransportError,
)
from ganjing.factory import ClientFactory, create_client, create_extractor
from ganjing.models import (
    ChannelId,
    CompleteUploadResult,
    ContentId,
    ContentResult,
    ImageId,
    ProgressCallback,
    RefreshTokenResponse,
    ThumbnailResult,
    UploadProgress,
    UploadTokenResponse,
    VideoId,
    VideoMetadata,
    VideoStatusResult,
    VideoUploadResult,
    get_web_url,
)

# Public API
__all__ = [
    "ApplicationError",
    "Category",
    "ChannelId",
    "ClientFactory",
    "CompleteUploadResult",
    "ContentId",
    "ContentResult",
    "ErrorKind",
    "ExtractionError",
    "ExtractionUnavailableError",
    "GanJingClient",
    "GanJingError",
    "ImageId",
    "MediaFileNotFoundError",
    "MediaFileReadError",
    "ParseError",
    "ParseErrorKind",
    "ProcessingStatus",
    "ProgressCallback",
    "RefreshTokenResponse",
    "ThumbnailRequiredError",
    "ThumbnailResult",
    "TransportError",
    "UploadAssets",
    "UploadController",
    "UploadPhase",
    "UploadProgress",
    "UploadTokenResponse",
    "VideoId",
    "VideoMetadata",
    "VideoStatusResult",
    "VideoUploadResult",
    "Visibility",
    "create_client",
    "create_extractor",
    "get_web_url",
]
