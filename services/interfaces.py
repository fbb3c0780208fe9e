"""
Service layer interfaces (ABCs).

These abstract base classes define the contracts the command dispatcher
depends on, so tests can substitute fakes without touching the network.

Usage:
    class MyClient(IBeatmapClient):
        def fetch_by_id(self, beatmapset_id: int | str) -> Result[Beatmapset]:
            ...
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from domain.models.beatmap import Beatmapset
    from services.beatmap_client import DownloadUrls
    from services.result import Result


class IBeatmapClient(ABC):
    """Interface for the remote beatmap API."""

    @abstractmethod
    def fetch_by_id(self, beatmapset_id: int | str) -> "Result[Beatmapset]":
        """Fetch one beatmapset. Fails with NOT_FOUND on 404, FETCH_FAILED otherwise."""
        ...

    @abstractmethod
    def search(self, query: str) -> "Result[list[Beatmapset]]":
        """Search ranked/approved/loved beatmapsets. Zero matches is a success."""
        ...

    @abstractmethod
    def background_preview_url(self, beatmapset_id: int | str) -> str:
        """URL of the background preview image (no network call)."""
        ...

    @abstractmethod
    def download_urls(self, beatmapset_id: int | str) -> "DownloadUrls":
        """Download URLs with and without video (no network call)."""
        ...
