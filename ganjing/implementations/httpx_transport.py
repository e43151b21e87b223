"""
Httpx Transport Implementation

Concrete TransportInterface backed by httpx.AsyncClient.
"""

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from config.settings import HTTP_TIMEOUT_SECONDS
from ganjing.errors import TransportError
from ganjing.interfaces.transport_interface import (
    FileField,
    TransportInterface,
    TransportResponse,
)


class HttpxTransport(TransportInterface):
    """
    Async HTTP transport using httpx.

    One AsyncClient (and its connection pool) is shared by every request
    this transport sends, including concurrent workflows on the same client.

    Example:
        transport = HttpxTransport(timeout=60)
        response = await transport.request("GET", url, headers=headers)
        await transport.close()
    """

    def __init__(
        self,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize transport.

        Args:
            timeout: Per-request timeout in seconds
            client: Pre-built AsyncClient (tests pass one with a MockTransport)
        """
        self.logger = logging.getLogger(__name__)
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def request(
        self,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        json: Any = None,
        data: Optional[Dict[str, str]] = None,
        files: Optional[Dict[str, FileField]] = None,
    ) -> TransportResponse:
        self.logger.debug(f"{method} {url}")

        try:
            response = await self.client.request(
                method,
                url,
                headers=dict(headers) if headers else None,
                json=json,
                data=data,
                files=files,
            )
        except httpx.HTTPError as e:
            raise TransportError(
                f"{method} {url} failed: {type(e).__name__}: {e}",
                url=url,
            ) from e

        self.logger.debug(f"{method} {url} -> HTTP {response.status_code}")

        return TransportResponse(
            status_code=response.status_code,
            body=response.content,
            url=url,
        )

    async def close(self) -> None:
        await self.client.aclose()
