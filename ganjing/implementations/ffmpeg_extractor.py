"""
FFmpeg Extractor Implementation

ThumbnailExtractorInterface backed by the ffmpeg binary.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

from config.settings import (
    FFMPEG_BINARY,
    FFMPEG_TIMEOUT_SECONDS,
    THUMBNAIL_TIME_OFFSET_SECONDS,
)
from ganjing.interfaces.extractor_interface import ThumbnailExtractorInterface
from ganjing.utils.video_utils import extract_frame, has_ffmpeg


class FFmpegExtractor(ThumbnailExtractorInterface):
    """
    Extracts thumbnails with ffmpeg.

    ffmpeg runs in a worker thread so the event loop keeps serving other
    uploads while a frame is decoded.
    """

    def __init__(
        self,
        binary: str = FFMPEG_BINARY,
        timeout: float = FFMPEG_TIMEOUT_SECONDS,
    ):
        self.logger = logging.getLogger(__name__)
        self.binary = binary
        self.timeout = timeout
        self._available: Optional[bool] = None

    def is_available(self) -> bool:
        # The probe spawns a process, so only run it once
        if self._available is None:
            self._available = has_ffmpeg(self.binary)
            if not self._available:
                self.logger.warning(f"ffmpeg not found ({self.binary})")
        return self._available

    async def extract_frame(
        self,
        video_path: Union[str, Path],
        output_path: Optional[Union[str, Path]] = None,
        time_offset: float = THUMBNAIL_TIME_OFFSET_SECONDS,
    ) -> Path:
        return await asyncio.to_thread(
            extract_frame,
            video_path,
            output_path,
            time_offset,
            self.timeout,
            self.binary,
        )
