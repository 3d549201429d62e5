# ABOUTME: Models package initialization
# ABOUTME: Exports limiter strategy and statistics models

from .limiter import LimiterStrategy, RateLimiterStats

__all__ = [
    "LimiterStrategy",
    "RateLimiterStats",
]
