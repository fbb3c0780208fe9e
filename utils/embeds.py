"""
Reusable Discord embed builders.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import discord

from config import BOT_IDENTITY, EMBED_COLOR, MAX_TAGS
from utils.embed_safety import EMBED_LIMITS, truncate_field
from utils.formatting import (
    UNKNOWN,
    format_duration,
    format_number,
    format_rating,
    format_stat,
    or_unknown,
)

if TYPE_CHECKING:
    from domain.models.beatmap import Beatmapset
    from services.interfaces import IBeatmapClient


def _difficulty_block(beatmapset: Beatmapset) -> str:
    diff = beatmapset.first_difficulty
    if diff is None:
        return UNKNOWN

    max_combo = format_number(diff.max_combo) if diff.max_combo is not None else UNKNOWN
    return (
        f"**CS:** {format_stat(diff.cs)} | **AR:** {format_stat(diff.ar)} | "
        f"**HP:** {format_stat(diff.drain)}\n"
        f"**Stars:** {format_rating(diff.difficulty_rating)}\n"
        f"**Max Combo:** {max_combo}"
    )


def _play_stats_block(beatmapset: Beatmapset) -> str:
    diff = beatmapset.first_difficulty
    circles = sliders = spinners = playcount = passcount = None
    if diff is not None:
        circles, sliders, spinners = diff.count_circles, diff.count_sliders, diff.count_spinners
        playcount, passcount = diff.playcount, diff.passcount

    return (
        f"**Circles:** {format_number(circles)} | **Sliders:** {format_number(sliders)} | "
        f"**Spinners:** {format_number(spinners)}\n"
        f"**Plays:** {format_number(playcount)} | **Passes:** {format_number(passcount)}"
    )


def create_beatmap_embed(beatmapset: Beatmapset, client: IBeatmapClient) -> discord.Embed:
    """
    Build the lookup/search reply embed for a beatmapset.

    Only the first difficulty is shown; multi-difficulty sets are not
    enumerated.
    """
    embed = discord.Embed(
        title=truncate_field(beatmapset.title or UNKNOWN, EMBED_LIMITS["title"]),
        description=truncate_field(
            f"**Artist:** {beatmapset.artist}\n"
            f"**Creator:** {beatmapset.creator}\n"
            f"**Genre:** {or_unknown(beatmapset.genre)}\n"
            f"**Language:** {or_unknown(beatmapset.language)}",
            EMBED_LIMITS["description"],
        ),
        color=discord.Color(EMBED_COLOR),
    )

    diff = beatmapset.first_difficulty
    length = format_duration(diff.total_length if diff else None)
    bpm = format_stat(beatmapset.bpm)
    embed.add_field(name="Length / BPM", value=f"{length} | {bpm} BPM", inline=True)
    embed.add_field(
        name="Status",
        value=f"{or_unknown(beatmapset.status)}\n{format_rating(beatmapset.rating)}",
        inline=True,
    )
    embed.add_field(
        name="Favorites", value=format_number(beatmapset.favourite_count), inline=True
    )

    embed.add_field(name="Difficulty", value=_difficulty_block(beatmapset), inline=False)
    embed.add_field(name="Play Stats", value=_play_stats_block(beatmapset), inline=False)

    urls = client.download_urls(beatmapset.id)
    embed.add_field(
        name="Download Links",
        value=(
            f"[Download with Video]({urls.with_video})\n"
            f"[Download without Video]({urls.without_video})"
        ),
        inline=False,
    )

    tags = beatmapset.tag_list(MAX_TAGS)
    if tags:
        embed.add_field(name="Tags", value=truncate_field(", ".join(tags)), inline=False)

    embed.set_footer(text=f"Beatmap ID: {beatmapset.id} • {BOT_IDENTITY}")
    embed.set_image(url=client.background_preview_url(beatmapset.id))

    if beatmapset.cover_url:
        embed.set_thumbnail(url=beatmapset.cover_url)

    return embed
