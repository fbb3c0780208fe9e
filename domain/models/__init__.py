"""
Domain models - pure data structures representing business entities.
"""

from domain.models.beatmap import BeatmapDifficulty, Beatmapset

__all__ = ["Beatmapset", "BeatmapDifficulty"]
