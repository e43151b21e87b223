"""
Test Configuration and Fixtures

Shared fixtures for the GanJing upload client tests.

Nothing here touches the network or needs ffmpeg: requests go through
MockTransport and thumbnails through MockExtractor.

To use pytest:
    pip install -e ".[test]"
    pytest tests/
"""

from typing import List

import pytest

from ganjing.client import GanJingClient
from ganjing.constants import Category, Visibility
from ganjing.controllers.upload_controller import UploadController
from ganjing.implementations.mock_extractor import MockExtractor
from ganjing.implementations.mock_transport import MockTransport
from ganjing.models.identifiers import ChannelId
from ganjing.models.metadata import VideoMetadata

CDN = "https://cdn.example.com/img123"


# =============================================================================
# CANNED PLATFORM PAYLOADS
# =============================================================================


def token_payload(token: str = "upload_token_1") -> dict:
    return {
        "result": {"result_code": 201000, "message": "Ok"},
        "data": {"token": token},
    }


def thumbnail_payload(sizes=(140, 240, 672, 1280, 1920)) -> dict:
    return {
        "body": {
            "filename": "thumb.jpg",
            "image_id": "img123",
            "image_url": [f"{CDN}/{size}.webp" for size in sizes],
            "analyzed_score": {"raw_score": 0.42, "score": 3},
            "extension": "jpg,webp",
        },
        "header": {},
        "status_code": 200,
    }


def content_payload(content_id: str = "abc123xyz", title: str = "Test Video") -> dict:
    return {
        "result": {"result_code": 201000, "message": "Ok"},
        "data": {
            "id": content_id,
            "owner_id": "channel_1",
            "type": "Video",
            "category_id": "cat23",
            "slug": "test-video",
            "title": title,
            "description": "Test description",
            "visibility": "public",
            "poster_url": f"{CDN}/672.webp",
            "poster_hd_url": f"{CDN}/1280.webp",
            "created_at": 1700000000000,
            "view_count": 0,
        },
    }


def video_upload_payload(video_id: str = "vid001") -> dict:
    return {"body": {"video_id": video_id, "filename": "video.mp4"}}


def status_payload(
    video_id: str = "vid001",
    status: str = "in_progress",
    progress: int = 45,
) -> dict:
    return {
        "body": {
            "video_id": video_id,
            "filename": "video.mp4",
            "status": status,
            "progress": progress,
        },
    }


def processed_payload(video_id: str = "vid001") -> dict:
    """Finished videos come back without a status field"""
    return {
        "body": {
            "video_id": video_id,
            "filename": "video.mp4",
            "url": f"https://vod.example.com/{video_id}/index.m3u8",
            "duration_sec": "12.345",
            "width": 1920,
            "height": 1080,
            "loudness": "-14.2",
            "thumb": {"base_url": f"https://vod.example.com/{video_id}/thumb", "sizes": "140,240"},
        },
    }


@pytest.fixture
def payloads():
    """
    Provide the canned payload builders.

    Usage:
        def test_something(payloads):
            body = payloads.token("abc")
    """

    class Payloads:
        token = staticmethod(token_payload)
        thumbnail = staticmethod(thumbnail_payload)
        content = staticmethod(content_payload)
        video_upload = staticmethod(video_upload_payload)
        status = staticmethod(status_payload)
        processed = staticmethod(processed_payload)

    return Payloads


# =============================================================================
# TRANSPORT AND CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def mock_transport():
    """
    Provide a strict MockTransport: unqueued requests raise TransportError.

    Usage:
        def test_something(mock_transport):
            mock_transport.queue_response("GET", "/get-vod-token", {...})
    """
    return MockTransport(simulate_platform=False)


@pytest.fixture
def client(mock_transport):
    """GanJingClient wired to the strict mock transport"""
    return GanJingClient("test_access_token", transport=mock_transport)


@pytest.fixture
def queue_happy_path(mock_transport):
    """
    Queue token, thumbnail, draft and video responses for one upload.

    Status responses are left to the test.
    """

    def queue(content_id: str = "abc123xyz", video_id: str = "vid001") -> None:
        mock_transport.queue_response("GET", "/get-vod-token", token_payload())
        mock_transport.queue_response("POST", "/api/v1/image", thumbnail_payload())
        mock_transport.queue_response("POST", "/add-content", content_payload(content_id))
        mock_transport.queue_response("POST", "/api/v1/video", video_upload_payload(video_id))

    return queue


# =============================================================================
# CONTROLLER FIXTURES
# =============================================================================


class FakeSleep:
    """Async sleep replacement that records requested delays"""

    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def fake_sleep():
    return FakeSleep()


@pytest.fixture
def mock_extractor():
    """MockExtractor with ffmpeg "installed" and working"""
    return MockExtractor()


@pytest.fixture
def controller(client, mock_extractor, fake_sleep):
    """UploadController on mocks, with instant polling"""
    return UploadController(client=client, extractor=mock_extractor, sleep_func=fake_sleep)


# =============================================================================
# FILE FIXTURES
# =============================================================================


@pytest.fixture
def temp_video_file(tmp_path):
    """Small fake MP4 in a per-test directory"""
    path = tmp_path / "video.mp4"
    path.write_bytes(b"\x00\x00\x00\x18ftypmp42" + b"0" * 1024)
    return path


@pytest.fixture
def temp_image_file(tmp_path):
    """Small fake JPEG in a per-test directory"""
    path = tmp_path / "thumb.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0" + b"0" * 256 + b"\xff\xd9")
    return path


@pytest.fixture
def channel_id():
    return ChannelId("channel_1")


@pytest.fixture
def metadata():
    return VideoMetadata(
        title="Test Video",
        description="Test description",
        category=Category.TECH,
        visibility=Visibility.PUBLIC,
    )
