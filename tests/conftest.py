"""
Pytest fixtures for tests.

Provides a representative beatmapset payload (shaped like the mirror API's
/api/v2/s/{id} response) and a fake beatmap client, so no test touches the
network.
"""

import copy
from unittest.mock import MagicMock

import pytest

from domain.models.beatmap import Beatmapset
from services.beatmap_client import BeatmapClient
from services.interfaces import IBeatmapClient
from services.result import Result
from utils.rate_limiter import RateLimiter

TEST_USER_ID = 111222333
"""Standard Discord user ID for single-user tests."""

TEST_USER_ID_SECONDARY = 444555666
"""Secondary user ID for per-user isolation tests."""

SAMPLE_BEATMAPSET = {
    "id": 1234567,
    "title": "Test Song",
    "artist": "Test Artist",
    "creator": "TestMapper",
    "bpm": 180,
    "status": "ranked",
    "favourite_count": 12345,
    "rating": 9.123,
    "tags": "one two three four five six seven eight nine ten",
    "genre": {"id": 5, "name": "Electronic"},
    "language": {"id": 3, "name": "Japanese"},
    "covers": {
        "card": "https://assets.example/beatmaps/1234567/covers/card.jpg",
        "list": "https://assets.example/beatmaps/1234567/covers/list.jpg",
    },
    "beatmaps": [
        {
            "id": 9000001,
            "version": "Insane",
            "total_length": 125,
            "cs": 4,
            "ar": 9.3,
            "drain": 6,
            "difficulty_rating": 5.678,
            "max_combo": 1234,
            "count_circles": 1500,
            "count_sliders": 400,
            "count_spinners": 2,
            "playcount": 1234567,
            "passcount": 98765,
        },
        {
            "id": 9000002,
            "version": "Easy",
            "total_length": 125,
            "cs": 2,
            "ar": 3,
            "drain": 2,
            "difficulty_rating": 1.5,
            "max_combo": 300,
            "count_circles": 200,
            "count_sliders": 50,
            "count_spinners": 1,
            "playcount": 1000,
            "passcount": 900,
        },
    ],
}


@pytest.fixture
def beatmapset_payload():
    """Fresh copy of the sample payload; tests may mutate it freely."""
    return copy.deepcopy(SAMPLE_BEATMAPSET)


@pytest.fixture
def sample_beatmapset(beatmapset_payload):
    return Beatmapset.from_api(beatmapset_payload)


@pytest.fixture
def beatmap_client():
    """Real client with a mocked session; URL helpers work, HTTP is faked."""
    session = MagicMock()
    session.headers = {}
    return BeatmapClient(session=session)


@pytest.fixture
def fake_client(beatmap_client, sample_beatmapset):
    """
    Interface-level fake: remote calls are mocks (successful by default),
    URL helpers delegate to the real implementation.
    """
    client = MagicMock(spec=IBeatmapClient)
    client.fetch_by_id.return_value = Result.ok(sample_beatmapset)
    client.search.return_value = Result.ok([sample_beatmapset])
    client.background_preview_url.side_effect = beatmap_client.background_preview_url
    client.download_urls.side_effect = beatmap_client.download_urls
    return client


@pytest.fixture
def rate_limiter():
    return RateLimiter()


@pytest.fixture
def clock(monkeypatch):
    """
    Controllable monotonic clock for the rate limiter, in seconds.

    Only use from synchronous tests: it patches time.monotonic process-wide,
    which the asyncio event loop also reads.
    """
    state = {"now": 1000.0}
    monkeypatch.setattr("utils.rate_limiter.time.monotonic", lambda: state["now"])
    return state
