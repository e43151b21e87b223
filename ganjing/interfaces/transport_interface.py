"""
Transport Interface

Abstract HTTP transport used by the GanJing client.
The client builds requests and parses responses; the transport only moves
bytes. Swapping the real httpx transport for the mock one is how tests and
credential-less development run the full workflow.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

# multipart file tuple: (filename, content, mime type)
FileField = Tuple[str, bytes, str]


@dataclass(frozen=True)
class TransportResponse:
    """
    Raw HTTP response.

    Attributes:
        status_code: HTTP status code
        body: Raw response body
        url: Requested URL (for error messages)
    """

    status_code: int
    body: bytes
    url: str = ""

    @property
    def ok(self) -> bool:
        """True for 2xx responses"""
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class TransportInterface(ABC):
    """
    Abstract base class for HTTP transports.

    Implementations raise TransportError when no response could be
    obtained (connection refused, TLS failure, timeout). Non-2xx
    responses are returned as-is; judging them is the client's job.
    """

    @abstractmethod
    async def request(
        self,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        json: Any = None,
        data: Optional[Dict[str, str]] = None,
        files: Optional[Dict[str, FileField]] = None,
    ) -> TransportResponse:
        """
        Send one HTTP request.

        Args:
            method: "GET" or "POST"
            url: Absolute URL
            headers: Request headers
            json: JSON body (mutually exclusive with data/files)
            data: Plain multipart/form fields
            files: Multipart file fields

        Returns:
            TransportResponse

        Raises:
            TransportError: If no response was received
        """

    @abstractmethod
    async def close(self) -> None:
        """Release connections held by the transport"""
