"""
Utilities Package

Exposes the ffmpeg helpers used for automatic thumbnails.
"""

from ganjing.utils.video_utils import (
    build_extract_command,
    default_thumbnail_path,
    extract_frame,
    has_ffmpeg,
)

# Public API
__all__ = [
    "build_extract_command",
    "default_thumbnail_path",
    "extract_frame",
    "has_ffmpeg",
]
