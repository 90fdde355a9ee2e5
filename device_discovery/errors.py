"""Exceptions raised by the discovery client."""

from typing import Optional


class DiscoveryError(Exception):
    """Base class for discovery failures surfaced to the caller."""


class DiscoverySetupError(DiscoveryError):
    """Socket setup or probe transmission failed.

    Attributes:
        stage: Which setup step failed (bind, broadcast, send, timeout).
    """

    def __init__(self, stage: str, message: str):
        super().__init__(f"{stage} failed: {message}")
        self.stage = stage


class DiscoveryReceiveError(DiscoveryError):
    """Too many consecutive non-timeout receive errors."""

    def __init__(self, count: int, last_error: Optional[OSError] = None):
        detail = f": {last_error}" if last_error else ""
        super().__init__(f"receive failed {count} times in a row{detail}")
        self.count = count
        self.last_error = last_error
