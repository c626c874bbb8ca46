"""Asyncio client for the Twitch Kraken (v5) API."""

from kraken_client.adapters import (
    AiohttpTransport,
    HttpTransport,
    NotFoundError,
    ParseError,
    TransportError,
    TwitchAdapterError,
    TwitchKrakenAdapter,
)
from kraken_client.core.config import Settings, get_settings

__version__ = "1.0.0"

__all__ = [
    "TwitchKrakenAdapter",
    "HttpTransport",
    "AiohttpTransport",
    "TwitchAdapterError",
    "TransportError",
    "ParseError",
    "NotFoundError",
    "Settings",
    "get_settings",
]
