"""
Centralized configuration for the beatmap bot.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


def _parse_float(env_var: str, default: float | None) -> float | None:
    raw = os.getenv(env_var)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# DISCORD_BOT_TOKEN is accepted for deployments that already export it
DISCORD_TOKEN = os.getenv("DISCORD_TOKEN") or os.getenv("DISCORD_BOT_TOKEN")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

BOT_NAME = "KozyDot's Beatmap Downloader"
BOT_VERSION = "v1.0.0"
BOT_IDENTITY = f"{BOT_NAME} {BOT_VERSION}"

API_BASE_URL = "https://catboy.best"
# None means requests' default (wait indefinitely)
BEATMAP_API_TIMEOUT_SECONDS = _parse_float("BEATMAP_API_TIMEOUT_SECONDS", None)

COMMAND_PREFIX = "!bm"

RATE_LIMIT = 5  # requests per window
RATE_LIMIT_WINDOW_MS = 60_000  # 1 minute

SEARCH_LIMIT = 10
VALID_STATUSES = [1, 2, 4]  # ranked, approved, loved
SEARCH_MODE = -1  # all game modes
SEARCH_SORT = "ranked_desc"

EMBED_COLOR = 0xFF66AA
MAX_TAGS = 8
