import logging

import discord
from prometheus_client import start_http_server

from src.bot import Bot
from src.core import settings
from src.database.session import make_session_factory
from src.utils.extensions import walk_extensions

logger = logging.getLogger(__name__)

intents = discord.Intents.default()
intents.members = True
bot = Bot(session_factory=make_session_factory(settings.database), intents=intents)

# Load all cogs extensions.
for ext in walk_extensions():
    bot.load_extension(ext)

if __name__ == "__main__":
    if settings.METRICS_PORT:
        logger.debug(f"Starting metrics server listening on port: {settings.METRICS_PORT}")
        start_http_server(settings.METRICS_PORT)
    logger.info(f"Starting {settings.bot.NAME} {settings.VERSION or ''}".strip())
    bot.run(settings.bot.TOKEN)
