# ABOUTME: Rate limiter implementations package
# ABOUTME: Exports in-memory and no-op implementations of AbstractRateLimiter

from .memory import LeakyBucketRateLimiter, TokenBucketRateLimiter
from .noop import NoOpRateLimiter

__all__ = [
    "LeakyBucketRateLimiter",
    "TokenBucketRateLimiter",
    "NoOpRateLimiter",
]
