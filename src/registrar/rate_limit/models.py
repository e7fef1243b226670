"""Data models for Rate Limit."""

from dataclasses import dataclass


@dataclass
class RateLimitWindow:
    """Attempt counter for one identifier.

    Attributes:
        count: Attempts admitted in the current window.
        reset_at: Clock reading (seconds) at which the window expires.
    """

    count: int
    reset_at: float
