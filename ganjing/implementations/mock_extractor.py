"""
Mock Extractor Implementation

Simulated thumbnail extractor for testing without ffmpeg.
Writes a tiny placeholder JPEG and records every call.
"""

import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from config.settings import THUMBNAIL_TIME_OFFSET_SECONDS
from ganjing.errors import ExtractionError, MediaFileNotFoundError
from ganjing.interfaces.extractor_interface import ThumbnailExtractorInterface
from ganjing.utils.video_utils import default_thumbnail_path

# SOI + EOI markers: enough for anything that only sniffs the header
PLACEHOLDER_JPEG = b"\xff\xd8\xff\xe0" + b"\x00" * 16 + b"\xff\xd9"


class MockExtractor(ThumbnailExtractorInterface):
    """
    Mock thumbnail extractor.

    Example:
        # ffmpeg "installed"
        extractor = MockExtractor()

        # ffmpeg missing
        extractor = MockExtractor(available=False)

        # ffmpeg present but broken
        extractor = MockExtractor(fail=True)
    """

    def __init__(self, available: bool = True, fail: bool = False):
        self.logger = logging.getLogger(__name__)
        self.available = available
        self.fail = fail

        # Track extractions for testing
        self.extraction_history: List[Dict[str, Any]] = []

    def is_available(self) -> bool:
        return self.available

    async def extract_frame(
        self,
        video_path: Union[str, Path],
        output_path: Optional[Union[str, Path]] = None,
        time_offset: float = THUMBNAIL_TIME_OFFSET_SECONDS,
    ) -> Path:
        video_path = Path(video_path)
        if not video_path.exists():
            raise MediaFileNotFoundError(video_path)

        if self.fail:
            raise ExtractionError("[MOCK] Simulated extraction failure")

        out_path = Path(output_path) if output_path else default_thumbnail_path(video_path)
        out_path.write_bytes(PLACEHOLDER_JPEG)

        self.extraction_history.append(
            {
                "video_path": str(video_path),
                "output_path": str(out_path),
                "time_offset": time_offset,
                "timestamp": time.time(),
            },
        )
        self.logger.info(f"[MOCK] Thumbnail extracted: {out_path}")
        return out_path

    def get_last_extraction(self) -> Optional[Dict[str, Any]]:
        return self.extraction_history[-1] if self.extraction_history else None
