"""Twitch Kraken API adapter.

This module provides the Twitch v5 (Kraken) API adapter. Each lookup builds
a URL, issues one authenticated GET through the transport and returns the
parsed JSON body.
"""

import json
import logging
from typing import Any, Mapping, Optional

from kraken_client.core.config import Settings, get_settings
from .base import (
    AiohttpTransport,
    HttpTransport,
    NotFoundError,
    ParseError,
    TransportError,
)
from .query import QueryValue, build_query_string, encode_component, format_value

logger = logging.getLogger(__name__)

NOT_FOUND = "Not Found"


class TwitchKrakenAdapter:
    """Twitch Kraken API adapter.

    Holds the application credentials and issues requests with the
    ``Client-ID`` and versioned ``Accept`` headers. Only the client ID is
    ever transmitted; the secret is kept for callers that need it.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        transport: Optional[HttpTransport] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize the Twitch adapter.

        Args:
            client_id: Twitch Client ID
            client_secret: Twitch Client Secret
            transport: Optional HTTP transport (aiohttp-backed by default)
            settings: Optional settings (built-in defaults if not provided;
                the environment is not read)
        """
        settings = settings or Settings.model_construct()

        self._client_id = client_id
        self._client_secret = client_secret
        self.transport = transport or AiohttpTransport(
            timeout=settings.twitch_request_timeout
        )

        # API configuration
        self.api_base_url = settings.twitch_kraken_base_url
        self.private_api_base_url = settings.twitch_private_api_base_url
        self.usher_base_url = settings.twitch_usher_base_url
        self.accept_header = settings.twitch_accept_header

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        transport: Optional[HttpTransport] = None,
    ) -> "TwitchKrakenAdapter":
        """Create an adapter from the configured credentials.

        Raises:
            ValueError: If no client ID is configured
        """
        settings = settings or get_settings()
        if not settings.twitch_client_id:
            raise ValueError("TWITCH_CLIENT_ID is required to create a Twitch adapter")
        return cls(
            settings.twitch_client_id,
            settings.twitch_client_secret or "",
            transport=transport,
            settings=settings,
        )

    @property
    def client_id(self) -> str:
        """Twitch Client ID sent with every request."""
        return self._client_id

    @property
    def client_secret(self) -> str:
        """Twitch Client Secret (never transmitted)."""
        return self._client_secret

    @property
    def headers(self) -> dict:
        """Headers attached to every outgoing request."""
        return {
            "Client-ID": self._client_id,
            "Accept": self.accept_header,
        }

    async def request(self, target_url: str, timeout: Optional[float] = None) -> str:
        """Make an authenticated GET request.

        Args:
            target_url: Fully formed URL, query string included
            timeout: Optional per-call timeout in seconds

        Returns:
            str: Raw response body

        Raises:
            TransportError: If the HTTP call fails
        """
        logger.debug(f"Making Twitch API request: {target_url}")
        return await self.transport.get(target_url, self.headers, timeout=timeout)

    async def _get_json(self, url: str, timeout: Optional[float] = None) -> Any:
        body = await self.request(url, timeout=timeout)
        return self._parse(body, url)

    @staticmethod
    def _parse(body: str, url: str) -> Any:
        try:
            return json.loads(body, parse_constant=_reject_constant)
        except ValueError as e:
            raise ParseError(f"Invalid JSON from {url}: {e}", body=body) from e

    def _with_options(
        self, url: str, options: Optional[Mapping[str, QueryValue]]
    ) -> str:
        if options:
            url += build_query_string(options)
        return url

    async def get_user(self, username: str, timeout: Optional[float] = None) -> Any:
        """Get the live stream of a user.

        Args:
            username: Channel name

        Returns:
            Parsed JSON payload
        """
        url = f"{self.api_base_url}/streams/{username}"
        return await self._get_json(url, timeout=timeout)

    async def get_featured_streams(
        self,
        options: Optional[Mapping[str, QueryValue]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Get featured streams.

        Args:
            options: Optional query params, e.g. ``limit`` (default 25, max 100)
                and ``offset`` (default 0)
        """
        url = self._with_options(f"{self.api_base_url}/streams/featured", options)
        return await self._get_json(url, timeout=timeout)

    async def get_top_streams(
        self,
        options: Optional[Mapping[str, QueryValue]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Get the top live streams.

        Args:
            options: Optional query params:
                ``channel``: comma separated list of channels
                ``game``: streams categorized under a game
                ``language``: locale ID string, e.g. ``en``, ``fi``, ``es-mx``
                ``stream_type``: ``all``, ``playlist`` or ``live``
                ``limit``: maximum number of objects (default 25, max 100)
                ``offset``: object offset for pagination (default 0)
        """
        url = self._with_options(f"{self.api_base_url}/streams", options)
        return await self._get_json(url, timeout=timeout)

    async def get_top_games(
        self,
        options: Optional[Mapping[str, QueryValue]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Get games sorted by number of current viewers.

        Args:
            options: Optional ``limit`` and ``offset`` query params
        """
        url = self._with_options(f"{self.api_base_url}/games/top", options)
        return await self._get_json(url, timeout=timeout)

    async def get_users_by_game(self, game: str, timeout: Optional[float] = None) -> Any:
        """Get live streams for a game."""
        url = f"{self.api_base_url}/streams/?game={encode_component(game)}"
        return await self._get_json(url, timeout=timeout)

    async def get_stream_url(self, user: str, timeout: Optional[float] = None) -> str:
        """Resolve the HLS manifest URL of a channel.

        Requests a channel access token and interpolates the token and its
        signature into the Usher manifest URL. The ``p={random}`` parameter
        is left for the player to fill.

        Args:
            user: Channel name (case-insensitive)

        Returns:
            str: Manifest URL

        Raises:
            NotFoundError: If the channel does not exist
            TransportError: If the token request fails
            ParseError: If the token response is not valid JSON
        """
        user = user.lower()
        url = f"{self.private_api_base_url}/channels/{user}/access_token"

        try:
            data = await self._get_json(url, timeout=timeout)
        except TransportError as e:
            if e.status == 404 and _is_not_found(e.body):
                raise NotFoundError(f"Twitch channel '{user}' not found") from e
            raise

        if not isinstance(data, dict):
            raise ParseError(f"Unexpected access token payload from {url}")

        if data.get("error") == NOT_FOUND:
            raise NotFoundError(f"Twitch channel '{user}' not found")

        return (
            f"{self.usher_base_url}/{user}.m3u8"
            f"?player=twitchweb&&token={data.get('token')}&sig={data.get('sig')}"
            "&allow_audio_only=true&allow_source=true&type=any&p={random}"
        )

    async def search_channels(
        self,
        query: str,
        limit: int = 25,
        offset: int = 0,
        timeout: Optional[float] = None,
    ) -> Any:
        """Search channels by name, description or game.

        Args:
            query: Search query, matched entirely or partially
            limit: Maximum number of objects, sorted by followers (max 100)
            offset: Object offset for pagination
        """
        url = (
            f"{self.api_base_url}/search/channels"
            f"?query={encode_component(query)}&limit={limit}&offset={offset}"
        )
        return await self._get_json(url, timeout=timeout)

    async def search_streams(
        self,
        query: str,
        limit: int = 25,
        offset: int = 0,
        timeout: Optional[float] = None,
    ) -> Any:
        """Search live streams by channel description or game.

        Args:
            query: Search query, matched entirely or partially
            limit: Maximum number of objects (max 100)
            offset: Object offset for pagination
        """
        url = (
            f"{self.api_base_url}/search/streams"
            f"?query={encode_component(query)}&limit={limit}&offset={offset}"
        )
        return await self._get_json(url, timeout=timeout)

    async def search_games(
        self,
        query: str,
        live: bool = False,
        type: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """Search games by name.

        Args:
            query: Search query
            live: Only return games live on at least one channel
            type: Optional search type facet, omitted from the URL when None
        """
        url = f"{self.api_base_url}/search/games?query={encode_component(query)}"
        if type is not None:
            url += f"&type={encode_component(type)}"
        url += f"&live={format_value(live)}"
        return await self._get_json(url, timeout=timeout)

    async def close(self) -> None:
        """Close the transport if it supports closing."""
        close = getattr(self.transport, "close", None)
        if close is not None:
            await close()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(client_id='{self._client_id}')"

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()


def _reject_constant(name: str):
    # NaN and Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def _is_not_found(body: Optional[str]) -> bool:
    if not body:
        return False
    try:
        payload = json.loads(body)
    except ValueError:
        return False
    return isinstance(payload, dict) and payload.get("error") == NOT_FOUND
