"""Run-wide wall-clock deadline."""

from __future__ import annotations

import time

DEFAULT_DEADLINE_SECONDS = 300.0


class Deadline:
    """A fixed point in time after which no further requests are issued.

    Uses the monotonic clock so wall-clock adjustments do not shorten or
    extend a run.
    """

    def __init__(self, seconds: float = DEFAULT_DEADLINE_SECONDS) -> None:
        self.seconds = seconds
        self._expires_at = time.monotonic() + seconds

    def remaining(self) -> float:
        """Seconds left before the deadline, never negative."""
        return max(0.0, self._expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0.0
