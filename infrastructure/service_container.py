"""
Service container for dependency injection and initialization.

This module centralizes service creation and wiring so bot.py only has to
build the container and hand the services to the bot.

Usage:
    container = ServiceContainer(config)
    await container.initialize()

    # Access services
    client = container.beatmap_client
    limiter = container.rate_limiter
"""

import logging
from dataclasses import dataclass
from typing import Any

from config import (
    API_BASE_URL,
    BEATMAP_API_TIMEOUT_SECONDS,
    RATE_LIMIT,
    RATE_LIMIT_WINDOW_MS,
)
from services.beatmap_client import BeatmapClient
from utils.rate_limiter import RateLimiter

logger = logging.getLogger("beatmap_bot.infrastructure.container")


@dataclass
class ServiceConfig:
    """Configuration for service initialization."""

    # Beatmap API
    api_base_url: str = API_BASE_URL
    api_timeout_seconds: float | None = BEATMAP_API_TIMEOUT_SECONDS

    # Rate limiting
    rate_limit: int = RATE_LIMIT
    rate_limit_window_ms: int = RATE_LIMIT_WINDOW_MS


class ServiceContainer:
    """
    Central container for all application services.

    The rate limiter's per-user map lives here, so its lifetime is the
    process lifetime.
    """

    def __init__(self, config: ServiceConfig | None = None):
        """
        Initialize the container with configuration.

        Args:
            config: Service configuration (uses defaults if None)
        """
        self.config = config or ServiceConfig()
        self._initialized = False
        self._services: dict[str, Any] = {}

    @property
    def is_initialized(self) -> bool:
        """Check if container has been initialized."""
        return self._initialized

    async def initialize(self) -> None:
        """
        Create all services.

        This method is idempotent - calling it multiple times has no effect.
        """
        if self._initialized:
            logger.debug("ServiceContainer already initialized, skipping")
            return

        logger.info("Initializing ServiceContainer...")

        self._services["beatmap_client"] = BeatmapClient(
            base_url=self.config.api_base_url,
            timeout=self.config.api_timeout_seconds,
        )
        self._services["rate_limiter"] = RateLimiter(
            limit=self.config.rate_limit,
            window_ms=self.config.rate_limit_window_ms,
        )

        self._initialized = True
        logger.info("ServiceContainer initialization complete")

    @property
    def beatmap_client(self) -> "BeatmapClient | None":
        """Get beatmap API client."""
        return self._services.get("beatmap_client")

    @property
    def rate_limiter(self) -> "RateLimiter | None":
        """Get per-user rate limiter."""
        return self._services.get("rate_limiter")

    def expose_to_bot(self, bot) -> None:
        """
        Expose all services to a Discord bot object.

        Cogs read their dependencies from bot.<service_name> in setup().

        Args:
            bot: The Discord bot instance
        """
        bot.beatmap_client = self.beatmap_client
        bot.rate_limiter = self.rate_limiter

        logger.info("Services exposed to bot object")

    def close(self) -> None:
        """Release the HTTP session. Safe to call more than once."""
        client = self._services.get("beatmap_client")
        if client is not None:
            client.close()
        self._services.clear()
        self._initialized = False
