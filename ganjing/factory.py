"""
Client Factory

Factory pattern for creating GanJing clients and thumbnail extractors.

Automatically configures from environment variables.
"""

import logging
from typing import Literal, Optional

from config.settings import GANJING_ACCESS_TOKEN
from ganjing.client import GanJingClient
from ganjing.implementations.ffmpeg_extractor import FFmpegExtractor
from ganjing.implementations.httpx_transport import HttpxTransport
from ganjing.implementations.mock_extractor import MockExtractor
from ganjing.implementations.mock_transport import MockTransport
from ganjing.interfaces.extractor_interface import ThumbnailExtractorInterface

# Type aliases
ClientMode = Literal["auto", "live", "mock"]
ExtractorMode = Literal["auto", "ffmpeg", "mock"]

MOCK_ACCESS_TOKEN = "mock_access_token"


class ClientFactory:
    """
    Factory for creating clients and extractors.

    Reads configuration from environment variables:
    - GANJING_ACCESS_TOKEN: Raw access token of a logged-in session
    - GANJING_API_BASE / GANJING_IMG_API_BASE / GANJING_VOD_API_BASE

    Usage:
        # Auto-detect from environment
        client = ClientFactory.create_client()

        # Force mock for testing
        client = ClientFactory.create_client(mode="mock")
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def create_client(
        cls,
        mode: ClientMode = "auto",
        access_token: Optional[str] = None,
    ) -> GanJingClient:
        """
        Create a client instance.

        Args:
            mode: "auto" (from env), "live" (force real), "mock" (force sim)
            access_token: Override GANJING_ACCESS_TOKEN from environment

        Returns:
            GanJingClient with an HttpxTransport or a MockTransport

        Raises:
            RuntimeError: If mode="live" but no access token is configured

        Example:
            # Normal usage
            client = ClientFactory.create_client()

            # Testing
            client = ClientFactory.create_client(mode="mock")
        """
        if mode == "mock":
            cls._logger.info("Creating Mock Client (forced)")
            return cls._create_mock_client(access_token)

        if mode == "live":
            try:
                client = cls._create_live_client(access_token)
                cls._logger.info("Creating Live Client (forced)")
                return client
            except ValueError as e:
                raise RuntimeError(f"Live client requested but not available: {e}") from e

        # mode == "auto" - try live first, fall back to mock
        try:
            client = cls._create_live_client(access_token)
            cls._logger.info("Creating Live Client (auto-detected)")
            return client
        except ValueError as e:
            cls._logger.warning(f"Live client not available ({e}), using Mock Client")
            return cls._create_mock_client(access_token)

    @classmethod
    def _create_live_client(cls, access_token: Optional[str] = None) -> GanJingClient:
        """
        Create a networked client from environment configuration.

        Raises:
            ValueError: If no access token is available
        """
        token = access_token or GANJING_ACCESS_TOKEN
        if not token:
            raise ValueError(
                "GANJING_ACCESS_TOKEN not set in environment. "
                "Add to .env file: GANJING_ACCESS_TOKEN=<token from a logged-in session>"
            )
        return GanJingClient(token, transport=HttpxTransport())

    @classmethod
    def _create_mock_client(cls, access_token: Optional[str] = None) -> GanJingClient:
        return GanJingClient(access_token or MOCK_ACCESS_TOKEN, transport=MockTransport())

    @classmethod
    def create_extractor(cls, mode: ExtractorMode = "auto") -> ThumbnailExtractorInterface:
        """
        Create a thumbnail extractor.

        "auto" always returns an FFmpegExtractor; a missing ffmpeg binary
        shows up through is_available() at upload time rather than here.
        """
        if mode == "mock":
            cls._logger.info("Creating Mock Extractor (forced)")
            return MockExtractor()

        return FFmpegExtractor()

    @classmethod
    def is_live_available(cls) -> bool:
        """
        Check if a live client can be created.

        Returns:
            True if an access token is configured
        """
        return bool(GANJING_ACCESS_TOKEN)


# Convenience functions for quick creation
def create_client(
    force_mock: bool = False,
    access_token: Optional[str] = None,
) -> GanJingClient:
    """
    Quick client creation with simple mock override.

    Example:
        # Normal usage
        client = create_client()

        # Testing
        client = create_client(force_mock=True)
    """
    mode = "mock" if force_mock else "auto"
    return ClientFactory.create_client(mode=mode, access_token=access_token)


def create_extractor(force_mock: bool = False) -> ThumbnailExtractorInterface:
    """Quick extractor creation with simple mock override"""
    mode = "mock" if force_mock else "auto"
    return ClientFactory.create_extractor(mode=mode)
