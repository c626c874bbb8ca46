"""Example of querying the Twitch Kraken API with the adapter.

This example demonstrates how to:
1. Create an adapter from TWITCH_CLIENT_ID / TWITCH_CLIENT_SECRET settings
2. List the top games and the live streams for the most watched one
3. Search channels
4. Resolve a channel's HLS manifest URL
"""

import asyncio
import logging
import os
import sys

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from kraken_client import NotFoundError, TwitchKrakenAdapter
from kraken_client.core.config import get_settings

settings = get_settings()

# Configure logging
logging.basicConfig(level=settings.log_level, format=settings.log_format)
logger = logging.getLogger(__name__)


async def main(channel: str):
    async with TwitchKrakenAdapter.from_settings(settings) as twitch:
        top = await twitch.get_top_games({"limit": 5})
        for entry in top.get("top", []):
            logger.info(f"{entry['game']['name']}: {entry['viewers']} viewers")

        if top.get("top"):
            game = top["top"][0]["game"]["name"]
            streams = await twitch.get_users_by_game(game)
            logger.info(f"{streams.get('_total', 0)} live streams for {game}")

        channels = await twitch.search_channels(channel, limit=3)
        for found in channels.get("channels", []):
            logger.info(f"Found channel {found['name']} ({found.get('followers')} followers)")

        try:
            manifest = await twitch.get_stream_url(channel)
            logger.info(f"Manifest URL: {manifest}")
        except NotFoundError:
            logger.warning(f"Channel '{channel}' does not exist")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "shroud"))
