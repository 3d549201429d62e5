# ABOUTME: Exceptions package exports
# ABOUTME: Exports the admission control exception hierarchy

from admission.exceptions.base import (
    AdmissionException,
    ConfigurationError,
    LimiterStateError,
    RateLimitExceededException,
)

__all__ = [
    "AdmissionException",
    "ConfigurationError",
    "LimiterStateError",
    "RateLimitExceededException",
]
