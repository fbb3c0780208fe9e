"""
Main Discord bot entry for the beatmap bot.
"""

import logging
import sys

from config import BOT_IDENTITY, DISCORD_TOKEN, LOG_LEVEL

# Configure logging BEFORE importing discord to prevent duplicate handlers
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    force=True,  # Override any existing handlers (e.g., from discord.py)
)
logger = logging.getLogger("beatmap_bot")


# Suppress PyNaCl warning since voice support isn't needed
class _PyNaClFilter(logging.Filter):
    """Filter out the PyNaCl warning from discord.py."""

    def filter(self, record):
        return "PyNaCl is not installed" not in record.getMessage()


logging.getLogger("discord.client").addFilter(_PyNaClFilter())

# Now import discord after logging is configured
import discord
from discord.ext import commands

# Remove any handlers discord.py added to prevent duplicate output
_discord_logger = logging.getLogger("discord")
_discord_logger.handlers.clear()
_discord_logger.setLevel(logging.INFO)

from infrastructure.service_container import ServiceContainer

# Bot setup

intents = discord.Intents.default()
intents.message_content = True

# !bm is handled by a message listener, not the commands framework; a
# mention-only prefix keeps discord.py from treating "!bm" as an unknown command
bot = commands.Bot(command_prefix=commands.when_mentioned, intents=intents)

_container: ServiceContainer | None = None

EXTENSIONS = [
    "commands.beatmap",
]


async def _init_services() -> None:
    """Initialize all services via ServiceContainer (lazy, idempotent)."""
    global _container

    if _container is not None:
        return

    _container = ServiceContainer()
    await _container.initialize()
    _container.expose_to_bot(bot)


async def _load_extensions() -> None:
    """Load command extensions if not already loaded."""
    for ext in EXTENSIONS:
        if ext in bot.extensions:
            logger.debug(f"Extension {ext} already loaded, skipping")
            continue
        try:
            await bot.load_extension(ext)
            logger.info(f"Loaded extension: {ext}")
        except Exception as exc:
            logger.error(f"Failed to load extension {ext}: {exc}", exc_info=True)


@bot.event
async def setup_hook():
    """Build services, then load command cogs."""
    await _init_services()
    await _load_extensions()


@bot.event
async def on_ready():
    """Called when bot is ready."""
    border = "=" * 50
    logger.info(border)
    logger.info(BOT_IDENTITY)
    logger.info(border)
    logger.info(f"Bot is ready! Logged in as {bot.user}. Guilds: {len(bot.guilds)}")


@bot.event
async def on_error(event_method, *args, **kwargs):
    """Log errors raised inside event handlers instead of printing to stderr."""
    logger.error(f"Discord client error in {event_method}", exc_info=True)


def _shutdown_services() -> None:
    global _container

    if _container is not None:
        _container.close()
        _container = None


def main():
    """Run the bot."""
    if not DISCORD_TOKEN:
        logger.error("DISCORD_TOKEN not found! Set it in the environment or a .env file.")
        sys.exit(1)

    try:
        # Pass log_handler=None to prevent discord.py from adding its own handler
        bot.run(DISCORD_TOKEN, log_handler=None)
    except discord.LoginFailure as exc:
        logger.error(f"Failed to log in to Discord: {exc}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Bot stopped by user (Ctrl+C)")
    except Exception as exc:
        logger.error(f"Bot crashed: {exc}", exc_info=True)
        sys.exit(1)
    finally:
        _shutdown_services()


if __name__ == "__main__":
    main()
