# ABOUTME: In-memory implementations package
# ABOUTME: Provides the token bucket and leaky bucket rate limiters

from .leaky_bucket import LeakyBucketRateLimiter
from .token_bucket import TokenBucketRateLimiter

__all__ = [
    "LeakyBucketRateLimiter",
    "TokenBucketRateLimiter",
]
