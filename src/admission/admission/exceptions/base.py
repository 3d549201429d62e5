# ABOUTME: Exception classes for the admission control library
# ABOUTME: Provides structured error handling with context and error codes

from typing import Dict, Any


class AdmissionException(Exception):
    """Base exception class for the admission control library.

    Provides structured error handling with optional error codes and contextual
    details. All custom exceptions in the library inherit from this class so
    callers can catch a single root type.

    Note that an admission denial is never represented by an exception inside
    the limiters themselves; it is a plain ``False`` result.

    Attributes:
        message: Human-readable error message
        code: Optional error code for programmatic handling
        details: Optional dictionary containing contextual information
    """

    def __init__(self, message: str, code: str | None = None, details: Dict[str, Any] | None = None):
        """Initialize AdmissionException with message, optional code and details.

        Args:
            message: Human-readable error message
            code: Optional error code for programmatic handling
            details: Optional dictionary containing contextual information
        """
        self.message = message
        self.code = code
        self.details = details.copy() if details else {}
        super().__init__(self.message)


class ConfigurationError(AdmissionException):
    """Exception raised for invalid limiter configuration.

    Raised synchronously while a limiter is being constructed, before any
    background thread is started, when:
    - capacity is not a positive integer
    - refill rate is negative or not an integer
    - a duration parameter is not positive
    - an unknown limiter strategy is requested

    The ``details`` dictionary names the offending parameter and value.
    """

    pass


class LimiterStateError(AdmissionException):
    """Exception raised when a limiter lifecycle operation is misused.

    Stopping a token bucket is a one-shot operation. A second ``stop()`` call
    indicates a caller bug and raises this exception instead of being ignored.
    """

    pass


class RateLimitExceededException(AdmissionException):
    """Exception raised by callers that prefer failing on denial.

    The limiters report denial as ``False``. Harness code that would rather
    propagate an error can use ``AbstractRateLimiter.consume_or_raise``, which
    raises this exception with the limiter statistics in ``details``.
    """

    pass
