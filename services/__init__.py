"""
Application services layer.

Services talk to the beatmap API and decide how each command is answered.
"""

from services.beatmap_client import BeatmapClient, DownloadUrls

# Result type and error kinds for consistent error handling
from services.error_codes import ErrorKind
from services.result import Result

# Service interfaces (ABCs)
from services.interfaces import IBeatmapClient

__all__ = [
    # Concrete services
    "BeatmapClient",
    "DownloadUrls",
    # Result type
    "Result",
    "ErrorKind",
    # Interfaces
    "IBeatmapClient",
]
