"""
Upload Controller

High-level coordinator for GanJing World uploads.
Chains the client steps into one workflow:

    thumbnail → draft → video → status (snapshot or polling)

Three entry points, from most to least control:
- upload_assets(): the three upload steps, returns raw step results
- upload_complete(): upload_assets + status, returns CompleteUploadResult
- upload(): upload_complete with auto thumbnail and waiting always on
"""

import asyncio
import logging
import shutil
import tempfile
import time
from pathlib import Path
from typing import Awaitable, Callable, NamedTuple, Optional, Tuple, Union

from config.settings import DEFAULT_MAX_WAIT_SECONDS, DEFAULT_POLL_INTERVAL_SECONDS
from ganjing.client import GanJingClient
from ganjing.constants import UploadPhase
from ganjing.errors import (
    ExtractionUnavailableError,
    GanJingError,
    MediaFileNotFoundError,
    ThumbnailRequiredError,
)
from ganjing.factory import ClientFactory, create_extractor
from ganjing.interfaces.extractor_interface import ThumbnailExtractorInterface
from ganjing.models.identifiers import ChannelId, VideoId, get_web_url
from ganjing.models.metadata import VideoMetadata
from ganjing.models.progress import ProgressCallback, ProgressReporter
from ganjing.models.results import (
    CompleteUploadResult,
    ContentResult,
    ThumbnailResult,
    VideoStatusResult,
    VideoUploadResult,
)

PathLike = Union[str, Path]
SleepFunc = Callable[[float], Awaitable[None]]


class UploadAssets(NamedTuple):
    """Raw results of the three upload steps"""

    thumbnail_result: ThumbnailResult
    content_result: ContentResult
    video_result: VideoUploadResult


class UploadController:
    """
    High-level upload workflow controller.

    This class:
    - Prepares the thumbnail (given, or extracted from the video)
    - Runs the upload steps in order, each feeding the next
    - Reports progress through an optional callback
    - Polls processing status until done or out of time

    Steps of one workflow never overlap. Several workflows may run
    concurrently on the same controller; they share the client and its
    token cache.

    Usage:
        controller = UploadController()

        result = await controller.upload(
            "video.mp4",
            ChannelId("your_channel_id"),
            VideoMetadata(title="My Video"),
        )
        print(result.web_url)
    """

    def __init__(
        self,
        client: Optional[GanJingClient] = None,
        extractor: Optional[ThumbnailExtractorInterface] = None,
        sleep_func: SleepFunc = asyncio.sleep,
    ):
        """
        Initialize upload controller.

        Args:
            client: GanJingClient, or None to create a live client from .env
                (raises RuntimeError if GANJING_ACCESS_TOKEN is not set)
            extractor: Thumbnail extractor, or None for ffmpeg
            sleep_func: Coroutine used between status polls

        Example:
            # Normal usage - live client from .env
            controller = UploadController()

            # Custom collaborators (testing)
            client = GanJingClient("token", transport=MockTransport())
            controller = UploadController(client=client, extractor=MockExtractor())
        """
        self.logger = logging.getLogger(__name__)

        self.client = client or ClientFactory.create_client(mode="live")
        self.extractor = extractor or create_extractor()
        self.sleep_func = sleep_func

        self.logger.info("Upload Controller initialized")

    async def close(self) -> None:
        """Close the client and its transport"""
        await self.client.close()

    async def __aenter__(self) -> "UploadController":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # =========================================================================
    # ENTRY POINTS
    # =========================================================================

    async def upload_assets(
        self,
        video_path: PathLike,
        channel_id: ChannelId,
        metadata: VideoMetadata,
        thumbnail_path: PathLike = "",
        auto_extract_thumbnail: bool = True,
        on_progress: Optional[ProgressCallback] = None,
    ) -> UploadAssets:
        """
        Upload thumbnail, create draft, upload video.

        For callers that need custom post-processing: returns the full step
        results and does not touch processing status.

        Args:
            video_path: Video file to upload
            channel_id: Owning channel
            metadata: Video metadata for the draft
            thumbnail_path: Thumbnail JPEG ("" or missing file: extract one)
            auto_extract_thumbnail: Allow extracting a thumbnail from the video
            on_progress: Optional progress callback

        Returns:
            UploadAssets(thumbnail_result, content_result, video_result)

        Raises:
            MediaFileNotFoundError: Video (or image) missing
            ThumbnailRequiredError: No thumbnail and extraction disabled
            ExtractionUnavailableError: No thumbnail and no ffmpeg
            TransportError, ApplicationError, ParseError: A step failed
        """
        reporter = ProgressReporter(on_progress)
        try:
            return await self._upload_assets(
                video_path,
                channel_id,
                metadata,
                thumbnail_path,
                auto_extract_thumbnail,
                reporter,
            )
        except GanJingError as e:
            self._report_failure(reporter, e)
            raise

    async def upload_complete(
        self,
        video_path: PathLike,
        channel_id: ChannelId,
        metadata: VideoMetadata,
        thumbnail_path: PathLike = "",
        wait_for_processing: bool = True,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        max_wait_time: float = DEFAULT_MAX_WAIT_SECONDS,
        auto_extract_thumbnail: bool = True,
        on_progress: Optional[ProgressCallback] = None,
    ) -> CompleteUploadResult:
        """
        Run the whole workflow and collect every intermediate result.

        Args:
            wait_for_processing: Poll until processed/failed (True) or take a
                single status snapshot (False)
            poll_interval: Seconds between status polls
            max_wait_time: Seconds of polling before giving up

        Returns:
            CompleteUploadResult. After a polling timeout the result carries
            the last, non-terminal status; check
            result.processed_status.is_terminal.

        Raises:
            Same as upload_assets, plus errors from the status calls
        """
        reporter = ProgressReporter(on_progress)
        try:
            assets = await self._upload_assets(
                video_path,
                channel_id,
                metadata,
                thumbnail_path,
                auto_extract_thumbnail,
                reporter,
            )
            video_id = assets.video_result.video_id

            if wait_for_processing:
                self.logger.info("→ Waiting for video processing...")
                reporter.report(
                    UploadPhase.WAITING_FOR_PROCESSING,
                    "Waiting for video processing",
                    90,
                )
                status = await self.poll_until_ready(video_id, poll_interval, max_wait_time)
                phase = UploadPhase.COMPLETED
                self._log_final_status(status)
            else:
                reporter.report(UploadPhase.CHECKING_STATUS, "Checking initial status", 90)
                status = await self.client.get_status(video_id)
                phase = UploadPhase.CHECKING_STATUS
        except GanJingError as e:
            self._report_failure(reporter, e)
            raise

        content_id = assets.content_result.content_id
        result = CompleteUploadResult(
            content_id=content_id,
            video_id=video_id,
            image_id=assets.thumbnail_result.image_id,
            web_url=get_web_url(content_id),
            thumbnail_result=assets.thumbnail_result,
            content_result=assets.content_result,
            video_result=assets.video_result,
            processed_status=status,
            current_phase=phase,
            video_url=status.url,
            completed_at=int(time.time()),
        )

        reporter.report(UploadPhase.COMPLETED, "Upload complete", 100)
        self.logger.info(f"=== Upload complete: {result.web_url} ===")
        return result

    async def upload(
        self,
        video_path: PathLike,
        channel_id: ChannelId,
        metadata: VideoMetadata,
        thumbnail: PathLike = "",
        on_progress: Optional[ProgressCallback] = None,
    ) -> CompleteUploadResult:
        """
        Simplest upload API - just video, channel, metadata.

        Extracts a thumbnail if none is given and waits for processing.

        Example:
            def show_progress(p: UploadProgress):
                print(f"[{p.percent_complete}%] {p.phase.value}: {p.message}")

            result = await controller.upload(
                "video.mp4", channel_id, metadata, on_progress=show_progress
            )
            print(result.web_url)
        """
        return await self.upload_complete(
            video_path,
            channel_id,
            metadata,
            thumbnail_path=thumbnail,
            wait_for_processing=True,
            auto_extract_thumbnail=True,
            on_progress=on_progress,
        )

    async def wait_for_processing(
        self,
        video_id: VideoId,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        max_wait_time: float = DEFAULT_MAX_WAIT_SECONDS,
    ) -> VideoStatusResult:
        """
        Poll video status until processed or failed.

        Returns:
            Final VideoStatusResult (non-terminal if max_wait_time ran out)
        """
        return await self.poll_until_ready(video_id, poll_interval, max_wait_time)

    # =========================================================================
    # POLLING
    # =========================================================================

    async def poll_until_ready(
        self,
        video_id: VideoId,
        poll_interval: float,
        max_wait_time: float,
    ) -> VideoStatusResult:
        """
        Poll video status until processed/failed or timeout.

        Fixed interval, no backoff. Elapsed time is the sum of the sleeps,
        so a status call in flight when time runs out still completes.
        Running out of time is not an error: the last observed status is
        returned as-is.
        """
        elapsed = 0.0
        status = await self.client.get_status(video_id)

        while not status.is_terminal and elapsed < max_wait_time:
            await self.sleep_func(poll_interval)
            elapsed += poll_interval
            status = await self.client.get_status(video_id)

            if status.progress > 0:
                self.logger.info(f"  Processing: {status.progress}%")

        if not status.is_terminal:
            self.logger.warning(
                f"Stopped polling {video_id} after {elapsed:.0f}s "
                f"(status: {status.status.value})",
            )

        return status

    # =========================================================================
    # WORKFLOW STEPS
    # =========================================================================

    async def _upload_assets(
        self,
        video_path: PathLike,
        channel_id: ChannelId,
        metadata: VideoMetadata,
        thumbnail_path: PathLike,
        auto_extract_thumbnail: bool,
        reporter: ProgressReporter,
    ) -> UploadAssets:
        video_path = Path(video_path)

        self.logger.info("=== Starting upload ===")
        self.logger.info(f"Video: {video_path}")
        reporter.report(UploadPhase.GETTING_TOKEN, "Starting upload", 0)

        # Fail before anything is created on the platform
        if not video_path.is_file():
            raise MediaFileNotFoundError(video_path)

        thumb_path, temp_dir = await self._prepare_thumbnail(
            video_path,
            thumbnail_path,
            auto_extract_thumbnail,
        )

        reporter.report(UploadPhase.UPLOADING_THUMBNAIL, "Uploading thumbnail", 25)
        try:
            thumbnail_result = await self.client.upload_thumbnail(thumb_path)
        finally:
            if temp_dir is not None:
                self._cleanup_temp_dir(temp_dir)

        reporter.report(UploadPhase.CREATING_DRAFT, "Creating draft video", 50)
        content_result = await self.client.create_draft(
            channel_id,
            metadata,
            thumbnail_result.url_672,
            thumbnail_result.url_1280,
        )

        reporter.report(UploadPhase.UPLOADING_VIDEO, "Uploading video file", 75)
        video_result = await self.client.upload_video(
            video_path,
            channel_id,
            content_result.content_id,
        )

        return UploadAssets(thumbnail_result, content_result, video_result)

    async def _prepare_thumbnail(
        self,
        video_path: Path,
        thumbnail_path: PathLike,
        auto_extract: bool,
    ) -> Tuple[Path, Optional[Path]]:
        """
        Use the given thumbnail or extract one from the video.

        Returns:
            (thumbnail path, temp directory to delete afterwards or None)
        """
        if thumbnail_path and Path(thumbnail_path).is_file():
            self.logger.info(f"Thumbnail: {thumbnail_path}")
            return Path(thumbnail_path), None

        if not auto_extract:
            raise ThumbnailRequiredError(thumbnail_path)

        if not self.extractor.is_available():
            raise ExtractionUnavailableError()

        # One private directory per extraction, never the video's own directory
        temp_dir = Path(tempfile.mkdtemp(prefix="ganjing_thumb_"))
        output_path = temp_dir / f"{video_path.stem}_thumb.jpg"
        try:
            extracted = await self.extractor.extract_frame(video_path, output_path)
        except Exception:
            self._cleanup_temp_dir(temp_dir)
            raise

        self.logger.info("→ Extracted thumbnail from video")
        return extracted, temp_dir

    def _cleanup_temp_dir(self, temp_dir: Path) -> None:
        """Remove an extraction directory and its thumbnail; failures are only logged"""
        try:
            shutil.rmtree(temp_dir)
            self.logger.debug("→ Cleaned up temporary thumbnail")
        except OSError as e:
            self.logger.warning(f"Failed to remove temporary thumbnail {temp_dir}: {e}")

    def _report_failure(self, reporter: ProgressReporter, error: GanJingError) -> None:
        self.logger.error(f"❌ Upload failed ({error.kind.value}): {error}")
        reporter.fail(str(error))

    def _log_final_status(self, status: VideoStatusResult) -> None:
        if status.is_processed:
            self.logger.info("✅ Video processed successfully")
        elif status.is_failed:
            self.logger.error("❌ Video processing failed")
        else:
            self.logger.warning("⚠ Video still processing (timeout reached)")
