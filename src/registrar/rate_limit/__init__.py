"""Rate Limit - In-process fixed-window attempt counters."""

from registrar.rate_limit.exceptions import RateLimitedError
from registrar.rate_limit.limiter import RateLimiter
from registrar.rate_limit.models import RateLimitWindow

__all__ = [
    "RateLimitWindow",
    "RateLimitedError",
    "RateLimiter",
]
