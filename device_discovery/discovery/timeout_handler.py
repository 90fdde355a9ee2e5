"""Deadline tracking for discovery sessions."""

import time
from typing import Optional


class TimeoutHandler:
    """Tracks a single overall deadline across many receive calls."""

    def __init__(self, timeout: float):
        """Initialize timeout handler.

        Args:
            timeout: Overall timeout in seconds.
        """
        self.timeout = timeout
        self._start_time: Optional[float] = None

    @property
    def elapsed(self) -> float:
        """Seconds elapsed since start."""
        if self._start_time is None:
            return 0.0
        return time.monotonic() - self._start_time

    @property
    def remaining(self) -> float:
        """Seconds remaining before timeout."""
        return max(0.0, self.timeout - self.elapsed)

    @property
    def is_expired(self) -> bool:
        """Whether the timeout has expired."""
        if self._start_time is None:
            return False
        return self.elapsed >= self.timeout

    def start(self) -> None:
        """Start the timeout timer."""
        self._start_time = time.monotonic()
