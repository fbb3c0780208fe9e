"""
Simple in-memory rate limiter for beatmap commands.

This is not meant to be a perfect security boundary (restarts reset state),
but it prevents accidental spam against the beatmap API.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass

from config import RATE_LIMIT, RATE_LIMIT_WINDOW_MS

logger = logging.getLogger("beatmap_bot.utils.rate_limiter")


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    retry_after_seconds: int = 0


@dataclass
class RateRecord:
    user_id: int
    request_count: int
    window_start_ms: int


def _now_ms() -> int:
    return int(time.monotonic() * 1000)


class RateLimiter:
    """
    Fixed-window counter: allow `limit` requests per `window_ms` per user.

    The window is a hard cliff. A user who bursts at the end of one window
    can burst again right after it resets, up to 2x limit in a short span.
    Records are never evicted.
    """

    def __init__(self, limit: int = RATE_LIMIT, window_ms: int = RATE_LIMIT_WINDOW_MS) -> None:
        self.limit = limit
        self.window_ms = window_ms
        self._records: dict[int, RateRecord] = {}
        self._lock = threading.Lock()

    def check(self, user_id: int) -> RateLimitResult:
        now = _now_ms()
        with self._lock:
            record = self._records.get(user_id)

            if record is None:
                self._records[user_id] = RateRecord(user_id, 1, now)
                return RateLimitResult(allowed=True)

            if now - record.window_start_ms > self.window_ms:
                record.request_count = 1
                record.window_start_ms = now
                return RateLimitResult(allowed=True)

            if record.request_count >= self.limit:
                reset_in = max(0, self.window_ms - (now - record.window_start_ms))
                logger.warning(f"Rate limit exceeded for user {user_id}")
                # Round up, min 1: at exactly window_ms the window is still closed
                retry_after = max(1, -(-reset_in // 1000))
                return RateLimitResult(allowed=False, retry_after_seconds=retry_after)

            record.request_count += 1
            return RateLimitResult(allowed=True)

    def allow(self, user_id: int) -> bool:
        return self.check(user_id).allowed

    def remaining(self, user_id: int) -> int:
        """Requests left in the user's current window."""
        now = _now_ms()
        with self._lock:
            record = self._records.get(user_id)
            if record is None or now - record.window_start_ms > self.window_ms:
                return self.limit
            return max(0, self.limit - record.request_count)

    def reset_in_ms(self, user_id: int) -> int:
        """Milliseconds until the user's window resets (0 if unseen or expired)."""
        now = _now_ms()
        with self._lock:
            record = self._records.get(user_id)
            if record is None:
                return 0
            return max(0, self.window_ms - (now - record.window_start_ms))
