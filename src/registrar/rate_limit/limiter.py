"""RateLimiter - Fixed-window attempt counting keyed by identifier."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from registrar.rate_limit.models import RateLimitWindow

logger = logging.getLogger(__name__)


class RateLimiter:
    """Counts attempts per identifier in fixed time windows.

    A window opens on the first attempt for an identifier and lasts
    ``window_ms``. Up to ``max_attempts`` attempts are admitted inside it;
    the first attempt after it expires opens a new window. Because windows
    are fixed rather than sliding, a burst straddling a window boundary can
    be admitted up to twice ``max_attempts`` times.

    State lives in this instance only. Separate instances (e.g. one for
    logins, one for API writes) never interfere, and nothing is shared
    across processes.
    """

    def __init__(
        self,
        max_attempts: int = 5,
        window_ms: int = 15 * 60 * 1000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the limiter.

        Args:
            max_attempts: Default attempts admitted per window.
            window_ms: Default window length in milliseconds.
            clock: Monotonic clock returning seconds.
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if window_ms < 1:
            raise ValueError("window_ms must be positive")
        self.max_attempts = max_attempts
        self.window_ms = window_ms
        self._clock = clock
        self._windows: dict[str, RateLimitWindow] = {}
        self._lock = threading.Lock()

    def is_allowed(
        self,
        identifier: str,
        max_attempts: int | None = None,
        window_ms: int | None = None,
    ) -> bool:
        """Record an attempt and report whether it is admitted.

        Args:
            identifier: Key to count under (email, IP, or a composite).
            max_attempts: Override for this call's policy.
            window_ms: Override for this call's window length.

        Returns:
            True if the attempt is within the limit.
        """
        limit = self.max_attempts if max_attempts is None else max_attempts
        window_seconds = (self.window_ms if window_ms is None else window_ms) / 1000

        with self._lock:
            now = self._clock()
            window = self._windows.get(identifier)

            if window is None or now > window.reset_at:
                self._windows[identifier] = RateLimitWindow(
                    count=1, reset_at=now + window_seconds
                )
                return True

            if window.count >= limit:
                logger.info("Rate limit exceeded (limit=%d)", limit)
                return False

            window.count += 1
            return True

    def clear(self, identifier: str) -> None:
        """Forget all attempts for an identifier."""
        with self._lock:
            self._windows.pop(identifier, None)

    def remaining_attempts(self, identifier: str) -> int:
        """Attempts still admitted in the identifier's current window."""
        with self._lock:
            window = self._windows.get(identifier)
            if window is None or self._clock() > window.reset_at:
                return self.max_attempts
            return max(0, self.max_attempts - window.count)

    def reset_at(self, identifier: str) -> float | None:
        """Clock reading at which the identifier's window expires, if any."""
        with self._lock:
            window = self._windows.get(identifier)
            return None if window is None else window.reset_at
