"""
Beatmap lookup command: !bm <beatmapset_id> | !bm "search text"
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from services.command_dispatcher import (
    DispatcherDeps,
    InboundMessage,
    ReplyAction,
    ReplyKind,
    handle_message,
)

if TYPE_CHECKING:
    from services.interfaces import IBeatmapClient
    from utils.rate_limiter import RateLimiter

logger = logging.getLogger("beatmap_bot.commands.beatmap")


class BeatmapCommands(commands.Cog):
    """Listens for !bm messages and replies with beatmap embeds."""

    def __init__(
        self,
        bot: commands.Bot,
        beatmap_client: IBeatmapClient,
        rate_limiter: RateLimiter,
    ):
        self.bot = bot
        self.deps = DispatcherDeps(client=beatmap_client, limiter=rate_limiter)

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message):
        action = await handle_message(InboundMessage.from_discord(message), self.deps)
        if action.kind is ReplyKind.IGNORE:
            return
        await self._send_reply(message, action)

    async def _send_reply(self, message: discord.Message, action: ReplyAction) -> None:
        try:
            if action.kind is ReplyKind.EMBED:
                await message.reply(
                    embed=action.embed,
                    mention_author=False,
                    allowed_mentions=discord.AllowedMentions.none(),
                )
            else:
                await message.reply(
                    content=action.content,
                    mention_author=False,
                    allowed_mentions=discord.AllowedMentions.none(),
                )
        except discord.HTTPException as exc:
            logger.error(f"Failed to reply to {message.author}: {exc}", exc_info=True)


async def setup(bot: commands.Bot):
    """Setup function called when loading the cog."""
    beatmap_client = getattr(bot, "beatmap_client", None)
    rate_limiter = getattr(bot, "rate_limiter", None)

    if beatmap_client is None or rate_limiter is None:
        logger.error("beatmap cog: services not initialized on bot, skipping")
        return

    await bot.add_cog(BeatmapCommands(bot, beatmap_client, rate_limiter))
    logger.info("BeatmapCommands cog loaded")
