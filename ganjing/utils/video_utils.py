"""
Video Utilities

Thumbnail extraction from video files using ffmpeg.
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional, Union

from config.settings import (
    FFMPEG_BINARY,
    FFMPEG_JPEG_QUALITY,
    FFMPEG_TIMEOUT_SECONDS,
    THUMBNAIL_TIME_OFFSET_SECONDS,
)
from ganjing.errors import ExtractionError, MediaFileNotFoundError


logger = logging.getLogger(__name__)


def has_ffmpeg(binary: str = FFMPEG_BINARY) -> bool:
    """
    Check if ffmpeg is available.

    Returns:
        True if `ffmpeg -version` runs successfully
    """
    if shutil.which(binary) is None:
        return False

    try:
        result = subprocess.run(
            [binary, "-version"],
            capture_output=True,
            timeout=5,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug(f"ffmpeg probe failed: {e}")
        return False

    return result.returncode == 0


def default_thumbnail_path(video_path: Union[str, Path]) -> Path:
    """
    Derive thumbnail path from video path.

    Example:
        default_thumbnail_path("/videos/talk.mp4")
        # Returns: Path("/videos/talk_thumb.jpg")
    """
    video_path = Path(video_path)
    return video_path.with_name(f"{video_path.stem}_thumb.jpg")


def build_extract_command(
    video_path: Path,
    output_path: Path,
    time_offset: float = THUMBNAIL_TIME_OFFSET_SECONDS,
    binary: str = FFMPEG_BINARY,
) -> list:
    """
    Build the ffmpeg command line for a single-frame JPEG.

    -ss before -i seeks on the input (fast), -vframes 1 stops after one
    frame, -y overwrites a stale thumbnail.
    """
    return [
        binary,
        "-ss", str(time_offset),
        "-i", str(video_path),
        "-vframes", "1",
        "-q:v", str(FFMPEG_JPEG_QUALITY),
        str(output_path),
        "-y",
    ]


def extract_frame(
    video_path: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    time_offset: float = THUMBNAIL_TIME_OFFSET_SECONDS,
    timeout: float = FFMPEG_TIMEOUT_SECONDS,
    binary: str = FFMPEG_BINARY,
) -> Path:
    """
    Extract a frame from video as thumbnail using ffmpeg.

    Args:
        video_path: Path to video file
        output_path: Output JPEG (default: <stem>_thumb.jpg next to the video)
        time_offset: Time in seconds to extract frame
        timeout: Seconds before ffmpeg is killed
        binary: ffmpeg executable

    Returns:
        Path to extracted thumbnail

    Raises:
        MediaFileNotFoundError: If the video doesn't exist
        ExtractionError: If ffmpeg fails or writes nothing

    Example:
        thumb = extract_frame(Path("/videos/talk.mp4"), time_offset=2.5)
    """
    video_path = Path(video_path)
    if not video_path.exists():
        raise MediaFileNotFoundError(video_path)

    out_path = Path(output_path) if output_path else default_thumbnail_path(video_path)
    command = build_extract_command(video_path, out_path, time_offset, binary)

    logger.info(f"Extracting thumbnail from {video_path.name} at {time_offset}s")
    logger.debug(f"Command: {' '.join(command)}")

    try:
        result = subprocess.run(
            command,
            capture_output=True,
            timeout=timeout,
            text=True,
            check=False,
        )
    except FileNotFoundError as e:
        raise ExtractionError(f"ffmpeg not found: {binary}") from e
    except subprocess.TimeoutExpired as e:
        raise ExtractionError(f"ffmpeg timeout after {timeout}s") from e

    if result.returncode != 0:
        stderr = result.stderr.strip()[-500:] if result.stderr else ""
        raise ExtractionError(
            f"ffmpeg failed with exit code {result.returncode}\nOutput: {stderr}"
        )

    if not out_path.exists():
        raise ExtractionError(f"Thumbnail was not created: {out_path}")

    logger.info(f"✅ Thumbnail extracted: {out_path}")
    return out_path
