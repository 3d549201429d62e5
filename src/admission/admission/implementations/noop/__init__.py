# ABOUTME: NoOp implementations package
# ABOUTME: Contains the always-admit limiter for testing and benchmarking

from .rate_limiter import NoOpRateLimiter

__all__ = ["NoOpRateLimiter"]
