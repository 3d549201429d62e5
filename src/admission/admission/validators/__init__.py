# ABOUTME: Validators package for limiter construction parameters
# ABOUTME: Exports the capacity, rate and interval checks shared by all limiters

from .limiter_params import (
    NANOSECONDS_PER_SECOND,
    Duration,
    validate_capacity,
    validate_interval,
    validate_interval_ns,
    validate_refill_rate,
)

__all__ = [
    "NANOSECONDS_PER_SECOND",
    "Duration",
    "validate_capacity",
    "validate_interval",
    "validate_interval_ns",
    "validate_refill_rate",
]
