"""
Interfaces Package

Abstract interfaces for the external collaborators of the upload client.
"""

from ganjing.interfaces.extractor_interface import ThumbnailExtractorInterface
from ganjing.interfaces.transport_interface import (
    TransportInterface,
    TransportResponse,
)

__all__ = [
    "ThumbnailExtractorInterface",
    "TransportInterface",
    "TransportResponse",
]
