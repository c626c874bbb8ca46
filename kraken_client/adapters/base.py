"""Base adapter protocol and common functionality.

This module defines the error taxonomy shared by the Twitch adapter and the
HTTP transport protocol it delegates to, using Protocol instead of ABC.
"""

import asyncio
import logging
from typing import Mapping, Optional, Protocol, runtime_checkable

import aiohttp
from aiohttp import ClientSession, ClientTimeout

logger = logging.getLogger(__name__)


class TwitchAdapterError(Exception):
    """Base exception for Twitch adapter errors."""
    pass


class TransportError(TwitchAdapterError):
    """Exception raised when the underlying HTTP call fails.

    Covers connection and DNS failures, timeouts and non-2xx responses.
    """

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        status: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.cause = cause
        self.status = status
        self.body = body


class ParseError(TwitchAdapterError):
    """Exception raised when a response body is not valid JSON."""

    def __init__(self, message: str, body: Optional[str] = None):
        super().__init__(message)
        self.body = body


class NotFoundError(TwitchAdapterError):
    """Exception raised when the API reports that a channel does not exist."""
    pass


@runtime_checkable
class HttpTransport(Protocol):
    """Protocol for HTTP transports.

    A transport performs a single GET and returns the response body as text.
    Failures must be raised as TransportError.
    """

    async def get(
        self,
        url: str,
        headers: Mapping[str, str],
        timeout: Optional[float] = None,
    ) -> str:
        """Issue a GET request.

        Args:
            url: Fully formed request URL
            headers: Request headers
            timeout: Optional per-call timeout in seconds

        Returns:
            str: Response body

        Raises:
            TransportError: If the request fails
        """
        ...


class AiohttpTransport:
    """HTTP transport backed by an aiohttp ClientSession."""

    def __init__(self, session: Optional[ClientSession] = None, timeout: float = 30.0):
        """Initialize the transport.

        Args:
            session: Optional aiohttp ClientSession (created lazily when omitted)
            timeout: Default total timeout in seconds
        """
        self._session = session
        self._session_owned = session is None
        self.timeout = timeout

    @property
    def session(self) -> ClientSession:
        """Get the HTTP session, creating one if necessary."""
        if self._session is None:
            self._session = ClientSession(timeout=ClientTimeout(total=self.timeout))
            self._session_owned = True
        return self._session

    async def get(
        self,
        url: str,
        headers: Mapping[str, str],
        timeout: Optional[float] = None,
    ) -> str:
        kwargs = {}
        if timeout is not None:
            kwargs["timeout"] = ClientTimeout(total=timeout)

        try:
            async with self.session.get(url, headers=dict(headers), **kwargs) as response:
                try:
                    body = await response.text()
                except UnicodeDecodeError as e:
                    logger.error(f"Undecodable response body from {url}: {e}")
                    raise ParseError(f"Response body is not valid text: {e}") from e

                if response.status >= 400:
                    logger.error(f"Twitch API request failed: {response.status} {url}")
                    raise TransportError(
                        f"Twitch API request failed: {response.status} - {body}",
                        status=response.status,
                        body=body,
                    )

                return body

        except aiohttp.ClientError as e:
            logger.error(f"HTTP client error during Twitch API request: {e}")
            raise TransportError(f"HTTP client error: {e}", cause=e) from e
        except asyncio.TimeoutError as e:
            logger.error(f"Timed out requesting {url}")
            raise TransportError(f"Request timed out: {url}", cause=e) from e

    async def close(self) -> None:
        """Close the session if this transport created it."""
        if self._session_owned and self._session:
            await self._session.close()
            self._session = None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(timeout={self.timeout})"
