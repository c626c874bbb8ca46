"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock

# Add the project root to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from kraken_client.adapters.twitch import TwitchKrakenAdapter
from kraken_client.core.config import Settings


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with defaults only, ignoring any local .env file."""
    return Settings(
        _env_file=None,
        twitch_client_id="test_client_id",
        twitch_client_secret="test_client_secret",
        twitch_kraken_base_url="https://api.twitch.tv/kraken",
        twitch_private_api_base_url="http://api.twitch.tv/api",
        twitch_usher_base_url="http://usher.twitch.tv/api/channel/hls",
        log_level="DEBUG",
    )


@pytest.fixture
def mock_transport() -> AsyncMock:
    """Transport returning an empty JSON object by default."""
    transport = AsyncMock()
    transport.get.return_value = "{}"
    return transport


@pytest.fixture
def twitch_adapter(test_settings, mock_transport) -> TwitchKrakenAdapter:
    """Create a Twitch adapter wired to the mock transport."""
    return TwitchKrakenAdapter(
        "test_client_id",
        "test_client_secret",
        transport=mock_transport,
        settings=test_settings,
    )
