# ABOUTME: Construction parameter validation for rate limiters
# ABOUTME: Normalizes durations and rejects invalid capacities, rates and intervals

import math
from datetime import timedelta
from numbers import Real

from admission.exceptions import ConfigurationError

Duration = float | int | timedelta

NANOSECONDS_PER_SECOND = 1_000_000_000


def _is_integer(value: object) -> bool:
    # bool is an int subclass but never a meaningful count
    return isinstance(value, int) and not isinstance(value, bool)


def validate_capacity(capacity: int) -> int:
    """Ensure capacity is a positive integer.

    Raises:
        ConfigurationError: If capacity is not an integer greater than zero.
    """
    if not _is_integer(capacity) or capacity <= 0:
        raise ConfigurationError(
            f"capacity must be a positive integer, got {capacity!r}",
            code="INVALID_CAPACITY",
            details={"parameter": "capacity", "value": capacity},
        )
    return capacity


def validate_refill_rate(refill_rate: int) -> int:
    """Ensure the per-tick refill rate is a non-negative integer.

    Raises:
        ConfigurationError: If refill_rate is not an integer or is negative.
    """
    if not _is_integer(refill_rate) or refill_rate < 0:
        raise ConfigurationError(
            f"refill_rate must be a non-negative integer, got {refill_rate!r}",
            code="INVALID_REFILL_RATE",
            details={"parameter": "refill_rate", "value": refill_rate},
        )
    return refill_rate


def validate_interval(value: Duration, name: str) -> float:
    """Convert a duration to seconds and ensure it is positive.

    Args:
        value: Seconds as a number, or a ``timedelta``.
        name: Parameter name used in the error message.

    Returns:
        The duration in seconds as a float.

    Raises:
        ConfigurationError: If the value is not a duration or is not positive.
    """
    if isinstance(value, timedelta):
        seconds = value.total_seconds()
    elif isinstance(value, Real) and not isinstance(value, bool):
        seconds = float(value)
    else:
        raise ConfigurationError(
            f"{name} must be a number of seconds or a timedelta, got {type(value).__name__}",
            code="INVALID_INTERVAL",
            details={"parameter": name, "value": value},
        )

    # NaN fails this comparison too
    if not seconds > 0:
        raise ConfigurationError(
            f"{name} must be positive, got {value!r}",
            code="INVALID_INTERVAL",
            details={"parameter": name, "value": value},
        )
    return seconds


def validate_interval_ns(value: Duration, name: str) -> int:
    """Convert a duration to whole nanoseconds and ensure it is positive.

    Integers and ``timedelta`` values convert exactly; floats are rounded to
    the nearest nanosecond so that values such as ``0.1`` map to exactly
    ``100_000_000``.

    Raises:
        ConfigurationError: If the value is not a finite positive duration of at least one nanosecond.
    """
    seconds = validate_interval(value, name)

    if isinstance(value, timedelta):
        nanoseconds = (value // timedelta(microseconds=1)) * 1_000
    elif isinstance(value, int):
        nanoseconds = value * NANOSECONDS_PER_SECOND
    elif math.isfinite(seconds):
        nanoseconds = round(seconds * NANOSECONDS_PER_SECOND)
    else:
        nanoseconds = 0

    if nanoseconds <= 0:
        raise ConfigurationError(
            f"{name} must be a finite duration of at least one nanosecond, got {value!r}",
            code="INVALID_INTERVAL",
            details={"parameter": name, "value": value},
        )
    return nanoseconds
