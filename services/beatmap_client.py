"""
HTTP client for the osu!-compatible beatmap mirror API.

Both remote operations are plain request/response with no retries: any failure
is logged and returned immediately as a failed Result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests

from config import (
    API_BASE_URL,
    BEATMAP_API_TIMEOUT_SECONDS,
    BOT_IDENTITY,
    SEARCH_LIMIT,
    SEARCH_MODE,
    SEARCH_SORT,
    VALID_STATUSES,
)
from domain.models.beatmap import Beatmapset
from services.error_codes import ErrorKind
from services.interfaces import IBeatmapClient
from services.result import Result

logger = logging.getLogger("beatmap_bot.services.beatmap_client")


@dataclass(frozen=True)
class DownloadUrls:
    with_video: str
    without_video: str


def _error_detail(exc: requests.RequestException) -> str:
    """Response body if the server sent one, otherwise the exception text."""
    response = getattr(exc, "response", None)
    if response is not None and response.text:
        return response.text[:500]
    return str(exc)


class BeatmapClient(IBeatmapClient):
    """Wraps the mirror's /api/v2 endpoints and its derived download URLs."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        timeout: float | None = BEATMAP_API_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": BOT_IDENTITY})

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        response = self.session.get(f"{self.base_url}{path}", params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def fetch_by_id(self, beatmapset_id: int | str) -> Result[Beatmapset]:
        logger.info(f"Fetching info for beatmap set {beatmapset_id}")
        try:
            data = self._get(f"/api/v2/s/{beatmapset_id}")
            beatmapset = Beatmapset.from_api(data)
        except requests.HTTPError as exc:
            logger.error(
                f"Failed to get info for beatmap set {beatmapset_id}: {_error_detail(exc)}"
            )
            if exc.response is not None and exc.response.status_code == 404:
                return Result.fail("Beatmap not found", code=ErrorKind.NOT_FOUND)
            return Result.fail(f"Failed to get beatmap info - {exc}", code=ErrorKind.FETCH_FAILED)
        except (requests.RequestException, ValueError) as exc:
            # ValueError covers undecodable JSON and payloads that aren't a beatmapset
            logger.error(f"Failed to get info for beatmap set {beatmapset_id}: {exc}")
            return Result.fail(f"Failed to get beatmap info - {exc}", code=ErrorKind.FETCH_FAILED)

        logger.info(f"Retrieved info for beatmap set {beatmapset_id}")
        return Result.ok(beatmapset)

    def search(self, query: str) -> Result[list[Beatmapset]]:
        logger.info(f'Searching for beatmaps matching "{query}"')
        params = {
            "query": query,
            "limit": SEARCH_LIMIT,
            "status": ",".join(str(s) for s in VALID_STATUSES),
            "mode": SEARCH_MODE,
            "sort": SEARCH_SORT,
        }
        try:
            data = self._get("/api/v2/search", params=params)
        except (requests.RequestException, ValueError) as exc:
            detail = _error_detail(exc) if isinstance(exc, requests.RequestException) else str(exc)
            logger.error(f'Search failed for query "{query}": {detail}')
            return Result.fail(f"Failed to search beatmaps - {exc}", code=ErrorKind.SEARCH_FAILED)

        # A null or non-list body means nothing matched
        items = data if isinstance(data, list) else []
        results = []
        for index, item in enumerate(items):
            try:
                results.append(Beatmapset.from_api(item))
            except ValueError as exc:
                logger.warning(f'Skipping search result {index} for "{query}": {exc}')

        if results:
            logger.info(f'Found {len(results)} beatmaps matching "{query}"')
        else:
            logger.warning(f'No beatmaps found matching "{query}"')
        return Result.ok(results)

    def background_preview_url(self, beatmapset_id: int | str) -> str:
        return f"{self.base_url}/preview/background/{beatmapset_id}"

    def download_urls(self, beatmapset_id: int | str) -> DownloadUrls:
        return DownloadUrls(
            with_video=f"{self.base_url}/d/{beatmapset_id}",
            without_video=f"{self.base_url}/d/{beatmapset_id}n",
        )

    def close(self) -> None:
        self.session.close()
