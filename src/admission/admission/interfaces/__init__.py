# ABOUTME: Interfaces package exports
# ABOUTME: Exports the abstract rate limiter contract

from .rate_limiter import AbstractRateLimiter

__all__ = [
    "AbstractRateLimiter",
]
