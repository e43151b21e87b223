"""
GanJing Client

Step-level API for GanJing World: one method per platform call.
Each step builds its request, sends it through the transport, runs the
envelope checks and returns a typed result.

Most callers want UploadController, which chains these steps. Use the
client directly when you need partial control (e.g. reuse a thumbnail for
several drafts).
"""

import asyncio
import json
import logging
import time
from pathlib import Path
from typing import Callable, Optional, Sequence, Tuple, Union

from config.settings import (
    GANJING_API_BASE,
    GANJING_IMG_API_BASE,
    GANJING_VOD_API_BASE,
    UPLOAD_TOKEN_TTL_SECONDS,
)
from ganjing.auth.token_manager import TokenManager
from ganjing.constants import (
    ADD_CONTENT_PATH,
    CONTENT_MODE_DRAFT,
    CONTENT_TYPE_VIDEO,
    DEFAULT_THUMBNAIL_SIZES,
    IMAGE_MIME_TYPE,
    IMAGE_UPLOAD_PATH,
    RESIZING_LIST_HEADER,
    VIDEO_ACCEPT_LANGUAGE,
    VIDEO_MIME_TYPE,
    VIDEO_STATUS_PATH,
    VIDEO_UPLOAD_PATH,
)
from ganjing.errors import MediaFileNotFoundError, MediaFileReadError
from ganjing.implementations.httpx_transport import HttpxTransport
from ganjing.interfaces.transport_interface import TransportInterface
from ganjing.models.identifiers import ChannelId, ContentId, VideoId
from ganjing.models.metadata import VideoMetadata
from ganjing.models.results import (
    ContentResult,
    RefreshTokenResponse,
    ThumbnailResult,
    UploadTokenResponse,
    VideoStatusResult,
    VideoUploadResult,
)
from ganjing.parsing.envelope import decode_response
from ganjing.parsing.response_parser import (
    parse_content_result,
    parse_thumbnail_result,
    parse_video_status,
    parse_video_upload_result,
)

PathLike = Union[str, Path]


class GanJingClient:
    """
    GanJing World API client.

    Owns the transport and the token manager. Safe to share between
    concurrent workflows: the only mutable state is the token cache, which
    the token manager guards.

    Usage:
        async with GanJingClient(access_token, transport=HttpxTransport()) as client:
            thumb = await client.upload_thumbnail("thumb.jpg")
            draft = await client.create_draft(channel_id, metadata,
                                              thumb.url_672, thumb.url_1280)
    """

    def __init__(
        self,
        access_token: str,
        transport: Optional[TransportInterface] = None,
        api_base: str = GANJING_API_BASE,
        img_api_base: str = GANJING_IMG_API_BASE,
        vod_api_base: str = GANJING_VOD_API_BASE,
        token_ttl: float = UPLOAD_TOKEN_TTL_SECONDS,
        time_func: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize client.

        Args:
            access_token: Raw GanJing World access token
            transport: HTTP transport (default: HttpxTransport)
            api_base: Main API host (tokens, drafts)
            img_api_base: Image service host
            vod_api_base: Video service host
            token_ttl: Upload token lifetime in seconds
            time_func: Clock for token expiry
        """
        self.logger = logging.getLogger(__name__)

        self.transport = transport or HttpxTransport()
        self.api_base = api_base.rstrip("/")
        self.img_api_base = img_api_base.rstrip("/")
        self.vod_api_base = vod_api_base.rstrip("/")

        self.token_manager = TokenManager(
            access_token=access_token,
            transport=self.transport,
            api_base=self.api_base,
            ttl=token_ttl,
            time_func=time_func,
        )

        self.logger.info(f"GanJing Client initialized ({type(self.transport).__name__})")

    async def close(self) -> None:
        """Close the underlying transport"""
        await self.transport.close()

    async def __aenter__(self) -> "GanJingClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # =========================================================================
    # AUTHENTICATION
    # =========================================================================

    async def get_upload_token(self) -> UploadTokenResponse:
        """
        Get upload token (cached until it expires).

        Returns:
            UploadTokenResponse with token field
        """
        token = await self.token_manager.ensure_token()
        return UploadTokenResponse(token=token)

    async def refresh_access_token(self) -> RefreshTokenResponse:
        """
        Get a fresh access/refresh token pair from the current access token.

        Returns:
            RefreshTokenResponse with user_id, token, refresh_token
        """
        return await self.token_manager.refresh_access_token()

    # =========================================================================
    # IMAGE UPLOAD
    # =========================================================================

    async def upload_thumbnail(
        self,
        image_path: PathLike,
        sizes: Sequence[int] = DEFAULT_THUMBNAIL_SIZES,
    ) -> ThumbnailResult:
        """
        Upload a thumbnail image.

        Only the "file" multipart field is sent; the image service rejects
        uploads that carry a "name" field.

        Args:
            image_path: JPEG to upload
            sizes: Resolutions the image service should generate

        Returns:
            ThumbnailResult with image id and all generated URLs

        Raises:
            MediaFileNotFoundError: If image_path doesn't exist
            MediaFileReadError: If image_path exists but cannot be read
            TransportError, ApplicationError, ParseError
        """
        image_data, filename = await _read_file(image_path)
        token = await self.token_manager.ensure_token()

        headers = _upload_headers(token)
        headers[RESIZING_LIST_HEADER] = ",".join(str(size) for size in sizes)

        response = await self.transport.request(
            "POST",
            f"{self.img_api_base}{IMAGE_UPLOAD_PATH}",
            headers=headers,
            files={"file": (filename, image_data, IMAGE_MIME_TYPE)},
        )
        payload = decode_response(response, "Thumbnail upload")
        result = parse_thumbnail_result(payload)

        self.logger.info(f"→ Thumbnail uploaded: {result.image_id}")
        self.logger.debug(f"  All URLs count: {len(result.all_urls)}")
        self.logger.debug(f"  Standard (672): {result.url_672}")
        self.logger.debug(f"  HD (1280): {result.url_1280}")
        return result

    # =========================================================================
    # CONTENT CREATION
    # =========================================================================

    async def create_draft(
        self,
        channel_id: ChannelId,
        metadata: VideoMetadata,
        poster_url: str,
        poster_hd_url: str,
    ) -> ContentResult:
        """
        Create a draft video content record.

        Args:
            channel_id: Owning channel
            metadata: Title, description, category, visibility, language
            poster_url: Standard poster (672 thumbnail URL)
            poster_hd_url: HD poster (1280 thumbnail URL)

        Returns:
            ContentResult with the new content id

        Raises:
            ApplicationError: Platform rejected the draft (checked before parsing)
            TransportError, ParseError
        """
        payload = build_draft_payload(channel_id, metadata, poster_url, poster_hd_url)
        headers = self.token_manager.auth_headers()
        headers["content-type"] = "application/json"

        response = await self.transport.request(
            "POST",
            f"{self.api_base}{ADD_CONTENT_PATH}",
            headers=headers,
            json=payload,
        )
        body = decode_response(response, "Draft creation")
        result = parse_content_result(body)

        self.logger.info(f"→ Draft created: {result.content_id}")
        self.logger.debug(f"  Title: {result.title}")
        self.logger.debug(f"  Slug: {result.slug}")
        self.logger.debug(f"  Owner: {result.owner_id}")
        return result

    # =========================================================================
    # VIDEO UPLOAD
    # =========================================================================

    async def upload_video(
        self,
        video_path: PathLike,
        channel_id: ChannelId,
        content_id: ContentId,
    ) -> VideoUploadResult:
        """
        Upload the video file and bind it to a content record.

        The whole file is read into memory and sent in one request.

        Returns:
            VideoUploadResult with the video id

        Raises:
            MediaFileNotFoundError: If video_path doesn't exist
            MediaFileReadError: If video_path exists but cannot be read
            TransportError, ApplicationError, ParseError
        """
        video_data, filename = await _read_file(video_path)
        token = await self.token_manager.ensure_token()

        headers = _upload_headers(token)
        headers["Accept-Language"] = VIDEO_ACCEPT_LANGUAGE

        metadata = {
            "filename": filename,
            "filetype": VIDEO_MIME_TYPE,
            "channel_id": str(channel_id),
            "content_id": str(content_id),
        }

        response = await self.transport.request(
            "POST",
            f"{self.vod_api_base}{VIDEO_UPLOAD_PATH}",
            headers=headers,
            data={"metadata": json.dumps(metadata)},
            files={"file": (filename, video_data, VIDEO_MIME_TYPE)},
        )
        payload = decode_response(response, "Video upload")
        result = parse_video_upload_result(payload)

        self.logger.info(f"→ Video uploaded: {result.video_id}")
        self.logger.debug(f"  Filename: {result.filename}")
        return result

    # =========================================================================
    # STATUS CHECK
    # =========================================================================

    async def get_status(self, video_id: VideoId) -> VideoStatusResult:
        """
        Get processing status of an uploaded video.

        Returns:
            VideoStatusResult (processed videos carry stream details)
        """
        token = await self.token_manager.ensure_token()

        response = await self.transport.request(
            "GET",
            f"{self.vod_api_base}{VIDEO_STATUS_PATH}/{video_id}",
            headers={"Authorization": f"Bearer {token}"},
        )
        payload = decode_response(response, "Status check")
        result = parse_video_status(payload)

        self.logger.info(f"→ Status: {result.status.value}")
        if result.progress > 0:
            self.logger.debug(f"  Progress: {result.progress}%")
        if result.url is not None:
            self.logger.debug(f"  Video URL: {result.url}")
        if result.duration_sec is not None:
            self.logger.debug(f"  Duration: {result.duration_sec}s")
        return result


# =============================================================================
# REQUEST HELPERS
# =============================================================================


def build_draft_payload(
    channel_id: ChannelId,
    metadata: VideoMetadata,
    poster_url: str,
    poster_hd_url: str,
) -> dict:
    """JSON body for add-content"""
    return {
        "user_id2": str(channel_id),
        "type": CONTENT_TYPE_VIDEO,
        "lang": metadata.lang,
        "category_id": metadata.category.value,
        "title": metadata.title,
        "description": metadata.description,
        "visibility": metadata.visibility.value,
        "mode": CONTENT_MODE_DRAFT,
        "poster_url": poster_url,
        "poster_hd_url": poster_hd_url,
    }


def _upload_headers(token: str) -> dict:
    return {
        "accept": "application/json, text/plain, */*",
        "Authorization": f"Bearer {token}",
    }


async def _read_file(path: PathLike) -> Tuple[bytes, str]:
    """Read a whole file in a worker thread; returns (data, filename)"""
    path = Path(path)
    if not path.is_file():
        raise MediaFileNotFoundError(path)
    try:
        data = await asyncio.to_thread(path.read_bytes)
    except OSError as e:
        raise MediaFileReadError(path, e) from e
    return data, path.name
