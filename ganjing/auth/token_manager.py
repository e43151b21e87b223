"""
Token Manager

Handles GanJing World authentication for the upload services.

Two tokens are involved:
1. Access token: raw session token, sent as-is in the authorization header
   of the main API (token and draft endpoints)
2. Upload token: short-lived token obtained with the access token, sent as
   "Bearer <token>" to the image and video services

The upload token is cached and re-acquired transparently once its TTL has
passed.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from config.settings import GANJING_API_BASE, UPLOAD_TOKEN_TTL_SECONDS
from ganjing.constants import REFRESH_TOKEN_PATH, UPLOAD_TOKEN_PATH
from ganjing.interfaces.transport_interface import TransportInterface
from ganjing.models.results import RefreshTokenResponse
from ganjing.parsing.envelope import decode_response
from ganjing.parsing.response_parser import parse_refresh_token, parse_upload_token


@dataclass(frozen=True)
class UploadToken:
    """Cached upload token with its lifetime (time_func clock seconds)"""

    token: str
    issued_at: float
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class TokenManager:
    """
    Manages access and upload tokens for one client instance.

    This class:
    - Acquires the upload token on first use
    - Re-acquires it once the TTL has elapsed
    - Refreshes the access token on request

    Concurrent workflows on the same client share one TokenManager. Checking
    and acquiring happen under one asyncio.Lock, so callers racing past an
    expired token wait for a single acquisition instead of issuing several.
    """

    def __init__(
        self,
        access_token: str,
        transport: TransportInterface,
        api_base: str = GANJING_API_BASE,
        ttl: float = UPLOAD_TOKEN_TTL_SECONDS,
        time_func: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize token manager.

        Args:
            access_token: Raw GanJing World access token
            transport: HTTP transport shared with the client
            api_base: Main API host
            ttl: Upload token lifetime in seconds
            time_func: Clock used for expiry (tests inject a fake one)

        Example:
            tokens = TokenManager(access_token, HttpxTransport())
            upload_token = await tokens.ensure_token()
        """
        self.logger = logging.getLogger(__name__)

        if not access_token:
            raise ValueError("access_token must not be empty")

        self.access_token = access_token
        self.transport = transport
        self.api_base = api_base.rstrip("/")
        self.ttl = ttl
        self.time_func = time_func

        self._upload_token: Optional[UploadToken] = None
        self._lock = asyncio.Lock()

        self.logger.debug(f"Token Manager initialized (ttl: {ttl}s)")

    def auth_headers(self) -> dict:
        """Headers for main API calls (raw access token, no Bearer prefix)"""
        return {
            "accept": "application/json",
            "authorization": self.access_token,
        }

    async def ensure_token(self) -> str:
        """
        Get a valid upload token, acquiring one if needed.

        Returns:
            Upload token string

        Raises:
            TransportError, ApplicationError, ParseError: Acquisition failed
            (propagated unchanged, no retry)
        """
        async with self._lock:
            cached = self._upload_token
            if cached is not None and not cached.is_expired(self.time_func()):
                return cached.token

            if cached is not None:
                self.logger.info("Upload token expired, acquiring a new one...")

            token = await self._acquire_upload_token()
            issued_at = self.time_func()
            self._upload_token = UploadToken(
                token=token,
                issued_at=issued_at,
                expires_at=issued_at + self.ttl,
            )
            self.logger.info("→ Upload token obtained")
            return token

    async def _acquire_upload_token(self) -> str:
        url = f"{self.api_base}{UPLOAD_TOKEN_PATH}"
        response = await self.transport.request("GET", url, headers=self.auth_headers())
        payload = decode_response(response, "Upload token request")
        return parse_upload_token(payload).token

    async def refresh_access_token(self) -> RefreshTokenResponse:
        """
        Exchange the current access token for a new access/refresh pair.

        The manager adopts the new access token for later calls. The cached
        upload token is kept; it stays valid until its own TTL runs out.

        Returns:
            RefreshTokenResponse with user_id, token, refresh_token
        """
        url = f"{self.api_base}{REFRESH_TOKEN_PATH}"
        response = await self.transport.request(
            "POST",
            url,
            headers={"Content-Type": "application/json"},
            json={"token": self.access_token},
        )
        payload = decode_response(response, "Access token refresh")
        result = parse_refresh_token(payload)

        self.access_token = result.token
        self.logger.info("→ Access token refreshed")
        return result

    def invalidate(self) -> None:
        """Drop the cached upload token; the next call re-acquires it"""
        self._upload_token = None
        self.logger.debug("Upload token invalidated")

    def has_valid_token(self) -> bool:
        """
        Check if a cached, unexpired upload token exists.

        Returns:
            True if ensure_token() would not hit the network
        """
        return (
            self._upload_token is not None
            and not self._upload_token.is_expired(self.time_func())
        )

    def token_expires_in(self) -> Optional[float]:
        """Seconds until the cached upload token expires, or None"""
        if self._upload_token is None:
            return None
        return max(0.0, self._upload_token.expires_at - self.time_func())
