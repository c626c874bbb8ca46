"""Twitch API adapters.

Provides the Kraken API adapter and the HTTP transport it delegates to.
"""

from .base import (
    HttpTransport,
    AiohttpTransport,
    TwitchAdapterError,
    TransportError,
    ParseError,
    NotFoundError,
)
from .query import build_query_string
from .twitch import TwitchKrakenAdapter

__all__ = [
    # Transport
    "HttpTransport",
    "AiohttpTransport",
    # Exceptions
    "TwitchAdapterError",
    "TransportError",
    "ParseError",
    "NotFoundError",
    # Helpers
    "build_query_string",
    # Implementations
    "TwitchKrakenAdapter",
]
