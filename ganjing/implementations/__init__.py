"""
Implementations Package

Concrete transports and thumbnail extractors.
"""

from ganjing.implementations.ffmpeg_extractor import FFmpegExtractor
from ganjing.implementations.httpx_transport import HttpxTransport
from ganjing.implementations.mock_extractor import MockExtractor
from ganjing.implementations.mock_transport import MockTransport

__all__ = [
    "FFmpegExtractor",
    "HttpxTransport",
    "MockExtractor",
    "MockTransport",
]
