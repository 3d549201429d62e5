# ABOUTME: Abstract rate limiter interface for admission control
# ABOUTME: Defines the contract shared by the token bucket, leaky bucket and no-op limiters

from abc import ABC, abstractmethod
from typing import Any, Hashable

from admission.exceptions import RateLimitExceededException
from admission.models import RateLimiterStats


class AbstractRateLimiter(ABC):
    """
    Abstract base class for in-process rate limiters.

    This interface defines the contract for deciding whether an action may
    proceed. Concrete implementations provide the replenishment policy (token
    bucket, leaky bucket, no-op) and must make the check-and-decrement atomic
    with respect to concurrent callers on other threads.

    Admission checks never block and never raise on denial: a denied request
    is reported as ``False``. Retry, backoff and queueing decisions belong to
    the caller.

    Implementations are usable as context managers; leaving the ``with`` block
    calls ``stop()``.
    """

    @abstractmethod
    def allow(self) -> bool:
        """
        Attempt to admit one action.

        Returns immediately. Consumes one token when one is available.

        Returns:
            bool: True if the action is admitted, False if it is denied.
        """
        pass

    @abstractmethod
    def stats(self) -> RateLimiterStats:
        """
        Take a snapshot of the limiter state.

        Reading statistics must not change admission state.

        Returns:
            RateLimiterStats: Capacity, available tokens and admission counters.
        """
        pass

    def consume(self, request_id: Hashable | None = None) -> bool:
        """
        Attempt to admit one action on behalf of an identified request.

        The request id is used for logging only; it does not select a separate
        bucket.

        Args:
            request_id: Optional caller-supplied identifier of the request.

        Returns:
            bool: True if the action is admitted, False if it is denied.
        """
        return self.allow()

    def consume_or_raise(self, request_id: Hashable | None = None) -> None:
        """
        Admit one action or raise when it is denied.

        Convenience for callers that prefer exceptions over boolean results.

        Raises:
            RateLimitExceededException: If no token is available.
        """
        if not self.consume(request_id):
            raise RateLimitExceededException(
                "Rate limit exceeded",
                code="RATE_LIMIT_EXCEEDED",
                details={"request_id": request_id, **self.stats().model_dump(mode="json")},
            )

    def stop(self) -> None:
        """
        Release background resources held by the limiter.

        The default implementation does nothing; limiters with background
        replenishment override it.
        """
        pass

    def __enter__(self) -> "AbstractRateLimiter":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.stop()
