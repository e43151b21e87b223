"""
Mock Transport Implementation

Simulated GanJing World backend for testing without network access.
Records every request and answers with canned or simulated responses.

Two ways to answer a request:
- queued responses, matched by HTTP method and URL path fragment (tests)
- a simulated platform that fabricates plausible payloads (development)
"""

import json
import logging
import time
from collections import deque
from typing import Any, Deque, Dict, List, Mapping, Optional, Tuple, Union
from uuid import uuid4

from ganjing.constants import (
    ADD_CONTENT_PATH,
    DEFAULT_THUMBNAIL_SIZES,
    IMAGE_UPLOAD_PATH,
    REFRESH_TOKEN_PATH,
    RESIZING_LIST_HEADER,
    UPLOAD_TOKEN_PATH,
    VIDEO_STATUS_PATH,
    VIDEO_UPLOAD_PATH,
)
from ganjing.errors import TransportError
from ganjing.interfaces.transport_interface import (
    FileField,
    TransportInterface,
    TransportResponse,
)

MOCK_CDN_BASE = "https://mock-cdn.ganjingworld.local"

# Queued entry: response to return, or exception to raise
_QueuedEntry = Union[TransportResponse, Exception]


class MockTransport(TransportInterface):
    """
    Mock HTTP transport for testing.

    Useful for:
    - Unit tests (queue exact payloads, inspect what was sent)
    - Development without a GanJing World account
    - CI/CD pipelines
    """

    def __init__(
        self,
        simulate_platform: bool = True,
        processing_polls: int = 0,
    ):
        """
        Initialize mock transport.

        Args:
            simulate_platform: If True, requests with nothing queued get a
                fabricated success response; if False they raise TransportError
            processing_polls: Simulated status calls per video that report
                "in_progress" before the video turns processed

        Example:
            # Strict mock for unit tests
            transport = MockTransport(simulate_platform=False)
            transport.queue_response("GET", "/get-vod-token", {"data": {"token": "t"}})

            # Fake backend for development
            transport = MockTransport(processing_polls=3)
        """
        self.logger = logging.getLogger(__name__)
        self.simulate_platform = simulate_platform
        self.processing_polls = processing_polls
        self.closed = False

        # Track requests for testing
        self.request_history: List[Dict[str, Any]] = []

        self._queued: Dict[Tuple[str, str], Deque[_QueuedEntry]] = {}
        self._status_calls: Dict[str, int] = {}

        self.logger.info(
            f"Mock Transport initialized "
            f"(simulate_platform: {simulate_platform}, "
            f"processing_polls: {processing_polls})",
        )

    # =========================================================================
    # QUEUEING
    # =========================================================================

    def queue_response(
        self,
        method: str,
        path: str,
        payload: Any = None,
        status_code: int = 200,
        body: Optional[Union[str, bytes]] = None,
    ) -> None:
        """
        Queue one response for the next matching request.

        Args:
            method: HTTP method to match
            path: Fragment that must appear in the request URL
            payload: JSON-serialisable body
            status_code: HTTP status to return
            body: Raw body, used instead of payload (e.g. invalid JSON)
        """
        if body is None:
            raw = json.dumps(payload).encode("utf-8")
        elif isinstance(body, str):
            raw = body.encode("utf-8")
        else:
            raw = body

        self._queue(method, path, TransportResponse(status_code=status_code, body=raw))

    def queue_error(self, method: str, path: str, error: Optional[Exception] = None) -> None:
        """Queue a connection-level failure for the next matching request"""
        self._queue(
            method,
            path,
            error or TransportError(f"[MOCK] Simulated connection failure: {path}"),
        )

    def _queue(self, method: str, path: str, entry: _QueuedEntry) -> None:
        self._queued.setdefault((method.upper(), path), deque()).append(entry)

    def _pop_queued(self, method: str, url: str) -> Optional[_QueuedEntry]:
        for (queued_method, path), entries in self._queued.items():
            if queued_method == method and path in url and entries:
                return entries.popleft()
        return None

    # =========================================================================
    # TRANSPORT INTERFACE
    # =========================================================================

    async def request(
        self,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        json: Any = None,
        data: Optional[Dict[str, str]] = None,
        files: Optional[Dict[str, FileField]] = None,
    ) -> TransportResponse:
        method = method.upper()
        headers = dict(headers or {})

        self.request_history.append(
            {
                "method": method,
                "url": url,
                "headers": headers,
                "json": json,
                "data": dict(data) if data else None,
                "files": {
                    name: (filename, mime, len(content))
                    for name, (filename, content, mime) in (files or {}).items()
                },
                "timestamp": time.time(),
            },
        )
        self.logger.debug(f"[MOCK] {method} {url}")

        entry = self._pop_queued(method, url)
        if isinstance(entry, Exception):
            raise entry
        if entry is not None:
            return TransportResponse(entry.status_code, entry.body, url=url)

        if not self.simulate_platform:
            raise TransportError(f"[MOCK] No response queued for {method} {url}", url=url)

        payload = self._simulate(method, url, headers, json, data, files)
        return TransportResponse(200, _dump(payload), url=url)

    async def close(self) -> None:
        self.closed = True
        self.logger.debug("[MOCK] Transport closed")

    # =========================================================================
    # SIMULATED PLATFORM
    # =========================================================================

    def _simulate(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        json_body: Any,
        data: Optional[Dict[str, str]],
        files: Optional[Dict[str, FileField]],
    ) -> Dict[str, Any]:
        if UPLOAD_TOKEN_PATH in url:
            return {
                "result": {"result_code": 201000, "message": "Ok"},
                "data": {"token": f"mock_upload_{uuid4().hex[:16]}"},
            }

        if REFRESH_TOKEN_PATH in url:
            return {
                "data": {
                    "user_id": "mock_user",
                    "token": f"mock_access_{uuid4().hex[:16]}",
                    "refresh_token": f"mock_refresh_{uuid4().hex[:16]}",
                },
            }

        if IMAGE_UPLOAD_PATH in url:
            return self._simulate_image(headers, files)

        if ADD_CONTENT_PATH in url:
            return self._simulate_content(json_body or {})

        if VIDEO_UPLOAD_PATH in url:
            metadata = json.loads((data or {}).get("metadata", "{}"))
            return {
                "body": {
                    "video_id": f"mock_{uuid4().hex[:11]}",
                    "filename": metadata.get("filename", "video.mp4"),
                },
                "header": {},
                "status_code": 200,
            }

        if VIDEO_STATUS_PATH in url:
            return self._simulate_status(url.rstrip("/").rsplit("/", 1)[-1])

        raise TransportError(f"[MOCK] Unknown endpoint: {method} {url}", url=url)

    def _simulate_image(
        self,
        headers: Dict[str, str],
        files: Optional[Dict[str, FileField]],
    ) -> Dict[str, Any]:
        image_id = f"mock_img_{uuid4().hex[:8]}"
        sizes_header = headers.get(RESIZING_LIST_HEADER)
        if sizes_header:
            sizes = [size.strip() for size in sizes_header.split(",") if size.strip()]
        else:
            sizes = [str(size) for size in DEFAULT_THUMBNAIL_SIZES]

        filename = "thumbnail.jpg"
        if files and "file" in files:
            filename = files["file"][0]

        return {
            "body": {
                "filename": filename,
                "image_id": image_id,
                "image_url": [f"{MOCK_CDN_BASE}/{image_id}/{size}.webp" for size in sizes],
                "analyzed_score": {"raw_score": 0.5, "score": 3},
                "extension": "jpg,webp",
            },
            "header": {},
            "status_code": 200,
        }

    def _simulate_content(self, draft: Mapping[str, Any]) -> Dict[str, Any]:
        now_ms = int(time.time() * 1000)
        content_id = f"mock_{uuid4().hex[:12]}"
        return {
            "result": {"result_code": 201000, "message": "Ok"},
            "data": {
                "id": content_id,
                "owner_id": draft.get("user_id2", "mock_channel"),
                "type": draft.get("type", "Video"),
                "category_id": draft.get("category_id", ""),
                "slug": content_id,
                "title": draft.get("title", ""),
                "description": draft.get("description", ""),
                "visibility": draft.get("visibility", "public"),
                "poster_url": draft.get("poster_url", ""),
                "poster_hd_url": draft.get("poster_hd_url", ""),
                "created_at": now_ms,
                "time_scheduled": now_ms,
                "view_count": 0,
                "like_count": 0,
                "save_count": 0,
                "comment_count": 0,
            },
        }

    def _simulate_status(self, video_id: str) -> Dict[str, Any]:
        calls = self._status_calls.get(video_id, 0) + 1
        self._status_calls[video_id] = calls

        if calls <= self.processing_polls:
            progress = int(100 * calls / (self.processing_polls + 1))
            return {
                "body": {
                    "video_id": video_id,
                    "filename": "video.mp4",
                    "status": "in_progress",
                    "progress": progress,
                },
            }

        # Processed videos come back without a status field
        return {
            "body": {
                "video_id": video_id,
                "filename": "video.mp4",
                "url": f"{MOCK_CDN_BASE}/{video_id}/index.m3u8",
                "duration_sec": "10.0",
                "width": 1920,
                "height": 1080,
                "loudness": "-14.0",
                "thumb": {"base_url": f"{MOCK_CDN_BASE}/{video_id}/thumb", "sizes": "140,240"},
            },
        }

    # =========================================================================
    # TESTING HELPER METHODS
    # =========================================================================

    def get_request_history(self) -> List[Dict[str, Any]]:
        """
        Get list of all requests sent.

        Returns:
            List of request records
        """
        return self.request_history.copy()

    def clear_history(self) -> None:
        """Clear request history"""
        self.request_history.clear()
        self.logger.debug("[MOCK] Request history cleared")

    def get_last_request(self) -> Optional[Dict[str, Any]]:
        """
        Get most recent request.

        Returns:
            Last request record, or None
        """
        return self.request_history[-1] if self.request_history else None

    def requests_to(self, path: str) -> List[Dict[str, Any]]:
        """All recorded requests whose URL contains path"""
        return [record for record in self.request_history if path in record["url"]]

    def count_requests(self, path: str) -> int:
        """Number of recorded requests whose URL contains path"""
        return len(self.requests_to(path))


def _dump(payload: Any) -> bytes:
    return json.dumps(payload).encode("utf-8")
