"""
Beatmap domain models.

Parsed from the beatmap API's beatmapset payload. Parsing is lenient: a
missing key becomes None (or an empty container) rather than an error, so a
sparse record still renders.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _name_of(value: Any) -> str | None:
    """Genre/language arrive either as a plain string or as {"id", "name"}."""
    if isinstance(value, dict):
        value = value.get("name")
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass
class BeatmapDifficulty:
    """A single difficulty chart within a beatmapset."""

    total_length: int | None = None  # seconds
    cs: float | None = None
    ar: float | None = None
    drain: float | None = None
    difficulty_rating: float | None = None
    max_combo: int | None = None
    count_circles: int | None = None
    count_sliders: int | None = None
    count_spinners: int | None = None
    playcount: int | None = None
    passcount: int | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "BeatmapDifficulty":
        return cls(
            total_length=data.get("total_length"),
            cs=data.get("cs"),
            ar=data.get("ar"),
            drain=data.get("drain"),
            difficulty_rating=data.get("difficulty_rating"),
            max_combo=data.get("max_combo"),
            count_circles=data.get("count_circles"),
            count_sliders=data.get("count_sliders"),
            count_spinners=data.get("count_spinners"),
            playcount=data.get("playcount"),
            passcount=data.get("passcount"),
        )


@dataclass
class Beatmapset:
    """
    A bundle of difficulty charts sharing one song, identified by a numeric set id.

    Read-only and never cached: each command fetches a fresh copy.
    """

    id: int
    title: str = ""
    artist: str = ""
    creator: str = ""
    bpm: float | None = None
    status: str | None = None
    favourite_count: int | None = None
    rating: float | None = None
    tags: str = ""
    genre: str | None = None
    language: str | None = None
    beatmaps: list[BeatmapDifficulty] = field(default_factory=list)
    covers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Beatmapset":
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected beatmapset payload: {type(data).__name__}")
        if data.get("id") is None:
            raise ValueError("Beatmapset payload has no id")

        difficulties = data.get("beatmaps") or []
        return cls(
            id=data["id"],
            title=data.get("title") or "",
            artist=data.get("artist") or "",
            creator=data.get("creator") or "",
            bpm=data.get("bpm"),
            status=data.get("status"),
            favourite_count=data.get("favourite_count"),
            rating=data.get("rating"),
            tags=data.get("tags") or "",
            genre=_name_of(data.get("genre")),
            language=_name_of(data.get("language")),
            beatmaps=[BeatmapDifficulty.from_api(b) for b in difficulties if isinstance(b, dict)],
            covers=dict(data.get("covers") or {}),
        )

    @property
    def first_difficulty(self) -> BeatmapDifficulty | None:
        """Only the first difficulty is displayed; the rest are not enumerated."""
        return self.beatmaps[0] if self.beatmaps else None

    def tag_list(self, limit: int | None = None) -> list[str]:
        tags = self.tags.split()
        return tags[:limit] if limit is not None else tags

    @property
    def cover_url(self) -> str | None:
        for key in ("list@2x", "list", "card"):
            url = self.covers.get(key)
            if url:
                return url
        return None
