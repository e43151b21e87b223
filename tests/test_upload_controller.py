"""
Upload Controller Tests

Tests cover:
1. Full workflow result assembly
2. Progress event order and the failure event
3. Thumbnail handling (given, extracted, required, unavailable)
4. Status polling: terminal states, timeout, interval
5. Simulated platform end to end, including concurrent uploads
"""

import asyncio
from pathlib import Path

import pytest

from ganjing.client import GanJingClient
from ganjing.constants import ErrorKind, ProcessingStatus, UploadPhase
from ganjing.controllers.upload_controller import UploadAssets, UploadController
from ganjing.errors import (
    ApplicationError,
    ExtractionUnavailableError,
    MediaFileNotFoundError,
    MediaFileReadError,
    ThumbnailRequiredError,
    TransportError,
)
from ganjing.implementations.mock_extractor import MockExtractor
from ganjing.implementations.mock_transport import MockTransport
from ganjing.models.identifiers import ContentId, ImageId, VideoId
from ganjing.models.metadata import VideoMetadata


@pytest.fixture
def events():
    return []


@pytest.fixture
def on_progress(events):
    return events.append


def phases(events):
    return [(event.phase, event.percent_complete) for event in events]


# =============================================================================
# FULL WORKFLOW
# =============================================================================


@pytest.mark.unit
class TestUploadComplete:
    """Test the whole thumbnail → draft → video → status workflow"""

    @pytest.mark.asyncio
    async def test_result_assembly(
        self,
        controller,
        mock_transport,
        queue_happy_path,
        payloads,
        temp_video_file,
        temp_image_file,
        channel_id,
        metadata,
    ):
        """Every id and intermediate result ends up in the final result"""
        queue_happy_path(content_id="abc123xyz", video_id="vid001")
        mock_transport.queue_response("GET", "/api/v1/status", payloads.processed("vid001"))

        result = await controller.upload_complete(
            temp_video_file, channel_id, metadata, thumbnail_path=temp_image_file
        )

        assert result.content_id == ContentId("abc123xyz")
        assert result.video_id == VideoId("vid001")
        assert result.image_id == ImageId("img123")
        assert result.web_url == "https://www.ganjingworld.com/video/abc123xyz"
        assert result.current_phase == UploadPhase.COMPLETED
        assert result.processed_status.is_processed
        assert result.video_url == "https://vod.example.com/vid001/index.m3u8"
        assert result.thumbnail_result.url_1280.endswith("/1280.webp")
        assert result.content_result.title == "Test Video"
        assert result.video_result.filename == "video.mp4"
        assert result.completed_at is not None

    @pytest.mark.asyncio
    async def test_request_order_and_posters(
        self,
        controller,
        mock_transport,
        queue_happy_path,
        payloads,
        temp_video_file,
        temp_image_file,
        channel_id,
        metadata,
    ):
        """Steps run in order and the draft uses the 672/1280 thumbnails"""
        queue_happy_path()
        mock_transport.queue_response("GET", "/api/v1/status", payloads.processed())

        await controller.upload_complete(
            temp_video_file, channel_id, metadata, thumbnail_path=temp_image_file
        )

        urls = [record["url"] for record in mock_transport.get_request_history()]
        assert [url.split("/", 3)[-1] for url in urls] == [
            "v1.0c/get-vod-token",
            "api/v1/image",
            "v1.0c/add-content",
            "api/v1/video",
            "api/v1/status/vid001",
        ]

        draft = mock_transport.requests_to("/add-content")[0]["json"]
        assert draft["poster_url"].endswith("/672.webp")
        assert draft["poster_hd_url"].endswith("/1280.webp")

        metadata_field = mock_transport.requests_to("/api/v1/video")[0]["data"]["metadata"]
        assert '"content_id": "abc123xyz"' in metadata_field

    @pytest.mark.asyncio
    async def test_progress_events(
        self,
        controller,
        mock_transport,
        queue_happy_path,
        payloads,
        temp_video_file,
        temp_image_file,
        channel_id,
        metadata,
        events,
        on_progress,
    ):
        queue_happy_path()
        mock_transport.queue_response("GET", "/api/v1/status", payloads.processed())

        await controller.upload_complete(
            temp_video_file,
            channel_id,
            metadata,
            thumbnail_path=temp_image_file,
            on_progress=on_progress,
        )

        assert phases(events) == [
            (UploadPhase.GETTING_TOKEN, 0),
            (UploadPhase.UPLOADING_THUMBNAIL, 25),
            (UploadPhase.CREATING_DRAFT, 50),
            (UploadPhase.UPLOADING_VIDEO, 75),
            (UploadPhase.WAITING_FOR_PROCESSING, 90),
            (UploadPhase.COMPLETED, 100),
        ]

    @pytest.mark.asyncio
    async def test_no_wait_takes_one_snapshot(
        self,
        controller,
        mock_transport,
        queue_happy_path,
        payloads,
        temp_video_file,
        temp_image_file,
        channel_id,
        metadata,
        events,
        on_progress,
        fake_sleep,
    ):
        """Without waiting, status is checked once and the phase says so"""
        queue_happy_path()
        mock_transport.queue_response("GET", "/api/v1/status", payloads.status(progress=10))

        result = await controller.upload_complete(
            temp_video_file,
            channel_id,
            metadata,
            thumbnail_path=temp_image_file,
            wait_for_processing=False,
            on_progress=on_progress,
        )

        assert result.current_phase == UploadPhase.CHECKING_STATUS
        assert result.processed_status.status == ProcessingStatus.IN_PROGRESS
        assert result.video_url is None
        assert mock_transport.count_requests("/api/v1/status") == 1
        assert fake_sleep.calls == []
        assert (UploadPhase.CHECKING_STATUS, 90) in phases(events)
        assert phases(events)[-1] == (UploadPhase.COMPLETED, 100)

    @pytest.mark.asyncio
    async def test_upload_assets_skips_status(
        self,
        controller,
        mock_transport,
        queue_happy_path,
        temp_video_file,
        temp_image_file,
        channel_id,
        metadata,
    ):
        queue_happy_path()

        assets = await controller.upload_assets(
            temp_video_file, channel_id, metadata, thumbnail_path=temp_image_file
        )

        assert isinstance(assets, UploadAssets)
        assert assets.content_result.content_id == ContentId("abc123xyz")
        assert assets.video_result.video_id == VideoId("vid001")
        assert mock_transport.count_requests("/api/v1/status") == 0


# =============================================================================
# THUMBNAIL HANDLING
# =============================================================================


@pytest.mark.unit
class TestThumbnailHandling:
    """Test thumbnail selection, extraction and cleanup"""

    @pytest.mark.asyncio
    async def test_given_thumbnail_kept(
        self,
        controller,
        mock_transport,
        mock_extractor,
        queue_happy_path,
        temp_video_file,
        temp_image_file,
        channel_id,
        metadata,
    ):
        """A caller-supplied thumbnail is uploaded and left in place"""
        queue_happy_path()

        await controller.upload_assets(
            temp_video_file, channel_id, metadata, thumbnail_path=temp_image_file
        )

        assert temp_image_file.exists()
        assert mock_extractor.extraction_history == []
        assert mock_transport.requests_to("/api/v1/image")[0]["files"]["file"][0] == "thumb.jpg"

    @pytest.mark.asyncio
    async def test_extracted_thumbnail_deleted(
        self,
        controller,
        mock_transport,
        mock_extractor,
        queue_happy_path,
        temp_video_file,
        channel_id,
        metadata,
    ):
        """An extracted thumbnail is uploaded, then removed"""
        queue_happy_path()

        await controller.upload_assets(temp_video_file, channel_id, metadata)

        extracted = Path(mock_extractor.get_last_extraction()["output_path"])
        assert extracted.parent != temp_video_file.parent
        assert mock_transport.requests_to("/api/v1/image")[0]["files"]["file"][0] == "video_thumb.jpg"
        assert not extracted.exists()
        assert not extracted.parent.exists()
        assert sorted(p.name for p in temp_video_file.parent.iterdir()) == ["video.mp4"]

    @pytest.mark.asyncio
    async def test_existing_thumb_file_beside_video_untouched(
        self,
        controller,
        mock_transport,
        queue_happy_path,
        tmp_path,
        channel_id,
        metadata,
    ):
        """A user's own <stem>_thumb.jpg next to the video survives extraction"""
        video = tmp_path / "talk.mp4"
        video.write_bytes(b"\x00\x00\x00\x18ftypmp42" + b"0" * 64)
        artwork = tmp_path / "talk_thumb.jpg"
        artwork.write_bytes(b"USER ARTWORK")
        queue_happy_path()

        await controller.upload_assets(video, channel_id, metadata, thumbnail_path="")

        assert artwork.read_bytes() == b"USER ARTWORK"
        assert mock_transport.requests_to("/api/v1/image")[0]["files"]["file"][0] == "talk_thumb.jpg"

    @pytest.mark.asyncio
    async def test_concurrent_extractions_use_separate_files(
        self, fake_sleep, tmp_path, channel_id, metadata
    ):
        """Two videos sharing a stem never share an extracted thumbnail path"""
        mock_extractor = MockExtractor()
        controller = UploadController(
            client=GanJingClient("tok", transport=MockTransport()),
            extractor=mock_extractor,
            sleep_func=fake_sleep,
        )
        videos = []
        for name in ("talk.mp4", "talk.mov"):
            video = tmp_path / name
            video.write_bytes(b"0" * 64)
            videos.append(video)

        await asyncio.gather(
            *(controller.upload_assets(video, channel_id, metadata) for video in videos)
        )

        outputs = [entry["output_path"] for entry in mock_extractor.extraction_history]
        assert len(set(outputs)) == 2
        assert not any(Path(output).exists() for output in outputs)

    @pytest.mark.asyncio
    async def test_missing_thumbnail_path_falls_back_to_extraction(
        self,
        controller,
        mock_extractor,
        queue_happy_path,
        temp_video_file,
        tmp_path,
        channel_id,
        metadata,
    ):
        queue_happy_path()

        await controller.upload_assets(
            temp_video_file, channel_id, metadata, thumbnail_path=tmp_path / "gone.jpg"
        )

        assert len(mock_extractor.extraction_history) == 1

    @pytest.mark.asyncio
    async def test_extracted_thumbnail_deleted_on_failure(
        self,
        controller,
        mock_transport,
        mock_extractor,
        payloads,
        temp_video_file,
        channel_id,
        metadata,
    ):
        """Cleanup also runs when the thumbnail upload fails"""
        mock_transport.queue_response("GET", "/get-vod-token", payloads.token())
        mock_transport.queue_error("POST", "/api/v1/image")

        with pytest.raises(TransportError):
            await controller.upload_assets(temp_video_file, channel_id, metadata)

        extracted = Path(mock_extractor.get_last_extraction()["output_path"])
        assert not extracted.parent.exists()
        assert sorted(p.name for p in temp_video_file.parent.iterdir()) == ["video.mp4"]

    @pytest.mark.asyncio
    async def test_thumbnail_required(
        self, controller, mock_transport, temp_video_file, channel_id, metadata
    ):
        """No thumbnail and extraction disabled fails before any request"""
        with pytest.raises(ThumbnailRequiredError) as exc_info:
            await controller.upload_assets(
                temp_video_file, channel_id, metadata, auto_extract_thumbnail=False
            )

        assert exc_info.value.kind == ErrorKind.THUMBNAIL_REQUIRED
        assert mock_transport.get_request_history() == []

    @pytest.mark.asyncio
    async def test_extraction_unavailable(
        self, client, mock_transport, fake_sleep, temp_video_file, channel_id, metadata
    ):
        controller = UploadController(
            client=client,
            extractor=MockExtractor(available=False),
            sleep_func=fake_sleep,
        )

        with pytest.raises(ExtractionUnavailableError):
            await controller.upload_assets(temp_video_file, channel_id, metadata)

        assert mock_transport.get_request_history() == []


# =============================================================================
# FAILURES
# =============================================================================


@pytest.mark.unit
class TestFailures:
    """Test error propagation and the failure event"""

    @pytest.mark.asyncio
    async def test_missing_video(
        self, controller, mock_transport, tmp_path, channel_id, metadata, events, on_progress
    ):
        """A missing video fails before anything is created on the platform"""
        with pytest.raises(MediaFileNotFoundError):
            await controller.upload_complete(
                tmp_path / "missing.mp4", channel_id, metadata, on_progress=on_progress
            )

        assert mock_transport.get_request_history() == []
        assert phases(events) == [(UploadPhase.GETTING_TOKEN, 0), (UploadPhase.FAILED, 0)]

    @pytest.mark.asyncio
    async def test_unreadable_thumbnail_reports_failure(
        self,
        controller,
        mock_transport,
        temp_video_file,
        temp_image_file,
        channel_id,
        metadata,
        events,
        on_progress,
        monkeypatch,
    ):
        """A read error on an existing file is typed and ends with one FAILED event"""

        def denied(self):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(Path, "read_bytes", denied)

        with pytest.raises(MediaFileReadError) as exc_info:
            await controller.upload_complete(
                temp_video_file,
                channel_id,
                metadata,
                thumbnail_path=temp_image_file,
                on_progress=on_progress,
            )

        assert exc_info.value.kind == ErrorKind.FILE_UNREADABLE
        assert phases(events)[-1] == (UploadPhase.FAILED, 25)
        assert [event.phase for event in events].count(UploadPhase.FAILED) == 1
        assert mock_transport.count_requests("/api/v1/image") == 0

    @pytest.mark.asyncio
    async def test_failed_event_keeps_last_percent(
        self,
        controller,
        mock_transport,
        payloads,
        temp_video_file,
        temp_image_file,
        channel_id,
        metadata,
        events,
        on_progress,
    ):
        """A draft rejection reports FAILED once, at the draft's percentage"""
        mock_transport.queue_response("GET", "/get-vod-token", payloads.token())
        mock_transport.queue_response("POST", "/api/v1/image", payloads.thumbnail())
        mock_transport.queue_response(
            "POST", "/add-content", {"message": "title required", "code": 400}
        )

        with pytest.raises(ApplicationError):
            await controller.upload_complete(
                temp_video_file,
                channel_id,
                metadata,
                thumbnail_path=temp_image_file,
                on_progress=on_progress,
            )

        assert phases(events)[-1] == (UploadPhase.FAILED, 50)
        assert [event.phase for event in events].count(UploadPhase.FAILED) == 1
        assert "title required" in events[-1].message
        assert mock_transport.count_requests("/api/v1/video") == 0

    @pytest.mark.asyncio
    async def test_broken_callback_does_not_abort(
        self,
        controller,
        mock_transport,
        queue_happy_path,
        payloads,
        temp_video_file,
        temp_image_file,
        channel_id,
        metadata,
    ):
        def broken(progress):
            raise RuntimeError("display crashed")

        queue_happy_path()
        mock_transport.queue_response("GET", "/api/v1/status", payloads.processed())

        result = await controller.upload_complete(
            temp_video_file,
            channel_id,
            metadata,
            thumbnail_path=temp_image_file,
            on_progress=broken,
        )

        assert result.current_phase == UploadPhase.COMPLETED


# =============================================================================
# POLLING
# =============================================================================


@pytest.mark.unit
class TestPolling:
    """Test status polling"""

    @pytest.mark.asyncio
    async def test_polls_until_processed(
        self, controller, mock_transport, payloads, fake_sleep
    ):
        """N in-progress answers then processed means N + 1 status calls"""
        mock_transport.queue_response("GET", "/get-vod-token", payloads.token())
        for progress in (20, 60, 90):
            mock_transport.queue_response(
                "GET", "/api/v1/status", payloads.status(progress=progress)
            )
        mock_transport.queue_response("GET", "/api/v1/status", payloads.processed())

        status = await controller.wait_for_processing(
            VideoId("vid001"), poll_interval=2, max_wait_time=60
        )

        assert status.is_processed
        assert mock_transport.count_requests("/api/v1/status") == 4
        assert fake_sleep.calls == [2, 2, 2]

    @pytest.mark.asyncio
    async def test_stops_on_failed(self, controller, mock_transport, payloads, fake_sleep):
        mock_transport.queue_response("GET", "/get-vod-token", payloads.token())
        mock_transport.queue_response("GET", "/api/v1/status", payloads.status())
        mock_transport.queue_response(
            "GET", "/api/v1/status", payloads.status(status="failed", progress=0)
        )

        status = await controller.wait_for_processing(
            VideoId("vid001"), poll_interval=1, max_wait_time=60
        )

        assert status.is_failed
        assert mock_transport.count_requests("/api/v1/status") == 2

    @pytest.mark.asyncio
    async def test_timeout_returns_last_status(
        self, controller, mock_transport, payloads, fake_sleep
    ):
        """Running out of time returns the last non-terminal status"""
        mock_transport.queue_response("GET", "/get-vod-token", payloads.token())
        for _ in range(10):
            mock_transport.queue_response("GET", "/api/v1/status", payloads.status(progress=50))

        status = await controller.wait_for_processing(
            VideoId("vid001"), poll_interval=1, max_wait_time=3
        )

        assert status.status == ProcessingStatus.IN_PROGRESS
        assert not status.is_terminal
        assert fake_sleep.calls == [1, 1, 1]
        assert mock_transport.count_requests("/api/v1/status") == 4

    @pytest.mark.asyncio
    async def test_already_processed_no_sleep(
        self, controller, mock_transport, payloads, fake_sleep
    ):
        mock_transport.queue_response("GET", "/get-vod-token", payloads.token())
        mock_transport.queue_response("GET", "/api/v1/status", payloads.processed())

        await controller.wait_for_processing(VideoId("vid001"), poll_interval=5, max_wait_time=60)

        assert fake_sleep.calls == []

    @pytest.mark.asyncio
    async def test_status_error_propagates(self, controller, mock_transport, payloads):
        """A failing status call aborts polling, no retry"""
        mock_transport.queue_response("GET", "/get-vod-token", payloads.token())
        mock_transport.queue_response("GET", "/api/v1/status", payloads.status())
        mock_transport.queue_error("GET", "/api/v1/status")

        with pytest.raises(TransportError):
            await controller.wait_for_processing(
                VideoId("vid001"), poll_interval=1, max_wait_time=60
            )

        assert mock_transport.count_requests("/api/v1/status") == 2


# =============================================================================
# SIMULATED PLATFORM
# =============================================================================


@pytest.mark.integration
class TestSimulatedPlatform:
    """Test complete uploads against MockTransport's simulated backend"""

    @pytest.mark.asyncio
    async def test_upload_end_to_end(
        self, fake_sleep, temp_video_file, channel_id, metadata, events, on_progress
    ):
        transport = MockTransport(processing_polls=2)
        controller = UploadController(
            client=GanJingClient("tok", transport=transport),
            extractor=MockExtractor(),
            sleep_func=fake_sleep,
        )

        async with controller:
            result = await controller.upload(
                temp_video_file, channel_id, metadata, on_progress=on_progress
            )

        assert result.processed_status.is_processed
        assert result.web_url.endswith(str(result.content_id))
        assert result.content_result.title == "Test Video"
        assert result.content_result.category_id == "cat23"
        assert len(result.thumbnail_result.all_urls) == 10
        assert transport.count_requests("/api/v1/status") == 3
        assert transport.closed is True
        assert phases(events)[-1] == (UploadPhase.COMPLETED, 100)

    @pytest.mark.asyncio
    async def test_concurrent_uploads_share_token(self, fake_sleep, tmp_path, channel_id):
        """Several workflows on one controller share one upload token"""
        transport = MockTransport()
        controller = UploadController(
            client=GanJingClient("tok", transport=transport),
            extractor=MockExtractor(),
            sleep_func=fake_sleep,
        )

        videos = []
        for index in range(3):
            path = tmp_path / f"video{index}.mp4"
            path.write_bytes(b"0" * 128)
            videos.append(path)

        results = await asyncio.gather(
            *(
                controller.upload(video, channel_id, VideoMetadata(title=video.stem))
                for video in videos
            )
        )

        assert [result.content_result.title for result in results] == [
            "video0",
            "video1",
            "video2",
        ]
        assert len({result.content_id for result in results}) == 3
        assert transport.count_requests("/get-vod-token") == 1
