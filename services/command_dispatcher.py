"""
Command dispatcher for `!bm` messages.

`handle_message` is a per-call state machine with no state of its own: each
message is classified (ignore / rate-limited / id lookup / search / invalid),
the beatmap client is called, and the outcome is returned as a ReplyAction.
It performs no Discord I/O, which keeps it testable without a live gateway;
commands/beatmap.py sends the reply.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import discord

from config import COMMAND_PREFIX
from services.error_codes import ErrorKind
from utils.embeds import create_beatmap_embed

if TYPE_CHECKING:
    from domain.models.beatmap import Beatmapset
    from services.interfaces import IBeatmapClient
    from utils.rate_limiter import RateLimiter

logger = logging.getLogger("beatmap_bot.services.command_dispatcher")

USAGE_TEXT = f'Invalid command format. Use:\n{COMMAND_PREFIX} <beatmapset_id>\n{COMMAND_PREFIX} "beatmap name"'
EMPTY_QUERY_TEXT = f'Please provide a search query between quotes. Example: {COMMAND_PREFIX} "song name"'
NO_RESULTS_TEXT = "No beatmaps found matching your search."

# str.isdigit() also accepts non-ASCII digits like "²"
_ID_PATTERN = re.compile(r"^[0-9]+$")


def rate_limited_text(retry_after_seconds: int) -> str:
    return (
        f"You are being rate limited. Please wait {retry_after_seconds} seconds "
        "before trying again."
    )


class CommandKind(Enum):
    ID_LOOKUP = "id_lookup"
    SEARCH = "search"
    INVALID = "invalid"


@dataclass(frozen=True)
class ParsedCommand:
    kind: CommandKind
    argument: str = ""


class ReplyKind(Enum):
    IGNORE = "ignore"
    TEXT = "text"
    EMBED = "embed"


@dataclass(frozen=True)
class ReplyAction:
    """What the platform adapter should do with the triggering message."""

    kind: ReplyKind
    content: str | None = None
    embed: discord.Embed | None = None
    error_code: ErrorKind | None = None

    @classmethod
    def ignore(cls) -> "ReplyAction":
        return cls(kind=ReplyKind.IGNORE)

    @classmethod
    def text(cls, content: str, code: ErrorKind | None = None) -> "ReplyAction":
        return cls(kind=ReplyKind.TEXT, content=content, error_code=code)

    @classmethod
    def error(cls, message: str, code: ErrorKind | None = None) -> "ReplyAction":
        return cls.text(f"Error: {message}", code=code)

    @classmethod
    def with_embed(cls, embed: discord.Embed) -> "ReplyAction":
        return cls(kind=ReplyKind.EMBED, embed=embed)


@dataclass(frozen=True)
class InboundMessage:
    """Platform-independent view of a chat message."""

    author_id: int
    author_name: str
    author_is_bot: bool
    content: str

    @classmethod
    def from_discord(cls, message: discord.Message) -> "InboundMessage":
        return cls(
            author_id=message.author.id,
            author_name=str(message.author),
            author_is_bot=message.author.bot,
            content=message.content or "",
        )


EmbedFactory = Callable[["Beatmapset", "IBeatmapClient"], discord.Embed]


@dataclass
class DispatcherDeps:
    client: IBeatmapClient
    limiter: RateLimiter
    embed_factory: EmbedFactory = create_beatmap_embed


def parse_command(content: str, prefix: str = COMMAND_PREFIX) -> ParsedCommand:
    """Classify the text after the prefix. Assumes content starts with prefix."""
    args = content[len(prefix):].strip()

    if _ID_PATTERN.match(args):
        return ParsedCommand(CommandKind.ID_LOOKUP, args)

    if len(args) >= 2 and args.startswith('"') and args.endswith('"'):
        return ParsedCommand(CommandKind.SEARCH, args[1:-1])

    return ParsedCommand(CommandKind.INVALID, args)


async def _handle_id_lookup(message: InboundMessage, beatmapset_id: str, deps: DispatcherDeps) -> ReplyAction:
    result = await asyncio.to_thread(deps.client.fetch_by_id, beatmapset_id)
    if not result.success:
        logger.error(f"Command error for {message.author_name}: {result.error}")
        return ReplyAction.error(result.error, code=result.error_code)

    embed = deps.embed_factory(result.value, deps.client)
    logger.info(f"Sent beatmap info for ID {beatmapset_id} to {message.author_name}")
    return ReplyAction.with_embed(embed)


async def _handle_search(message: InboundMessage, query: str, deps: DispatcherDeps) -> ReplyAction:
    if not query:
        logger.warning(f"Empty search query from {message.author_name}")
        return ReplyAction.text(EMPTY_QUERY_TEXT, code=ErrorKind.EMPTY_QUERY)

    result = await asyncio.to_thread(deps.client.search, query)
    if not result.success:
        logger.error(f"Command error for {message.author_name}: {result.error}")
        return ReplyAction.error(result.error, code=result.error_code)

    if not result.value:
        return ReplyAction.text(NO_RESULTS_TEXT)

    # API order is the ranking; take the top hit
    embed = deps.embed_factory(result.value[0], deps.client)
    logger.info(f'Sent search results for "{query}" to {message.author_name}')
    return ReplyAction.with_embed(embed)


async def handle_message(message: InboundMessage, deps: DispatcherDeps) -> ReplyAction:
    """
    Decide the reply for one inbound message.

    Never raises: unexpected errors from the client or embed construction are
    logged and surfaced as "Error: <message>".
    """
    if message.author_is_bot:
        return ReplyAction.ignore()
    if not message.content.startswith(COMMAND_PREFIX):
        return ReplyAction.ignore()

    limit = deps.limiter.check(message.author_id)
    if not limit.allowed:
        return ReplyAction.text(
            rate_limited_text(limit.retry_after_seconds), code=ErrorKind.RATE_LIMITED
        )

    logger.info(f"Processing command from {message.author_name}: {message.content}")
    command = parse_command(message.content)

    if command.kind is CommandKind.INVALID:
        logger.warning(f"Invalid command format from {message.author_name}: {message.content}")
        return ReplyAction.text(USAGE_TEXT, code=ErrorKind.INVALID_FORMAT)

    try:
        if command.kind is CommandKind.ID_LOOKUP:
            return await _handle_id_lookup(message, command.argument, deps)
        return await _handle_search(message, command.argument, deps)
    except Exception as exc:
        logger.error(f"Command error for {message.author_name}: {exc}", exc_info=True)
        return ReplyAction.error(str(exc))
