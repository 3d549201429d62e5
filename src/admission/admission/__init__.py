# ABOUTME: Admission control package initialization
# ABOUTME: Exposes the rate limiter strategies, factory and exception hierarchy

"""
In-process admission control.

This package provides rate limiters that decide whether an action may proceed
based on currently available capacity. Two interchangeable strategies are
offered: a token bucket refilled by a background thread and a leaky bucket
refilled lazily on each admission check.
"""

from loguru import logger

from admission.exceptions import (
    AdmissionException,
    ConfigurationError,
    LimiterStateError,
    RateLimitExceededException,
)
from admission.factory import create_rate_limiter
from admission.implementations import LeakyBucketRateLimiter, NoOpRateLimiter, TokenBucketRateLimiter
from admission.interfaces import AbstractRateLimiter
from admission.models import LimiterStrategy, RateLimiterStats

__version__ = "0.1.0"

# Library records stay silent until an application calls setup_logging().
logger.disable(__name__)

__all__ = [
    "AbstractRateLimiter",
    "TokenBucketRateLimiter",
    "LeakyBucketRateLimiter",
    "NoOpRateLimiter",
    "create_rate_limiter",
    "LimiterStrategy",
    "RateLimiterStats",
    "AdmissionException",
    "ConfigurationError",
    "LimiterStateError",
    "RateLimitExceededException",
]
