"""
Thumbnail Extractor Interface

Abstract interface for pulling a still frame out of a video file.
The upload workflow only needs two things from it: "is the tool here?"
and "give me a JPEG at time T".
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from config.settings import THUMBNAIL_TIME_OFFSET_SECONDS


class ThumbnailExtractorInterface(ABC):
    """Abstract base class for thumbnail extractors"""

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if the extraction tool is installed.

        Returns:
            True if extract_frame can be called
        """

    @abstractmethod
    async def extract_frame(
        self,
        video_path: Union[str, Path],
        output_path: Optional[Union[str, Path]] = None,
        time_offset: float = THUMBNAIL_TIME_OFFSET_SECONDS,
    ) -> Path:
        """
        Extract one frame as a JPEG.

        Args:
            video_path: Source video
            output_path: Where to write the JPEG (default: <stem>_thumb.jpg
                next to the video)
            time_offset: Position in seconds

        Returns:
            Path of the written JPEG

        Raises:
            MediaFileNotFoundError: If video_path does not exist
            ExtractionError: If no frame could be written
        """
