# ABOUTME: In-memory leaky bucket rate limiter with lazy, on-demand replenishment
# ABOUTME: Applies elapsed-time credit under a lock on every admission check

import threading
import time
from typing import Callable, Hashable

from loguru import logger

from admission.exceptions import ConfigurationError
from admission.interfaces import AbstractRateLimiter
from admission.models import LimiterStrategy, RateLimiterStats
from admission.validators import NANOSECONDS_PER_SECOND, Duration, validate_capacity, validate_interval_ns


class LeakyBucketRateLimiter(AbstractRateLimiter):
    """
    Leaky bucket rate limiter without a background thread.

    Credits are a saturating counter. Each ``leak_interval`` of elapsed time
    is worth one credit, paid out lazily when ``allow()`` runs. Only whole
    intervals are paid: ``last_leak`` advances by the intervals consumed
    rather than jumping to the current time, so the fractional remainder
    carries over to the next call and rapid calls never lose progress.

    Time is kept in integer nanoseconds so that whole intervals are counted
    exactly and ``last_leak`` always stays a whole multiple of the interval
    away from its starting point. Correctness depends only on a
    non-decreasing clock, not on timer precision. The clock is injectable
    for deterministic tests and must return nanoseconds.
    """

    def __init__(
        self,
        capacity: int,
        leak_interval: Duration,
        clock: Callable[[], int] = time.monotonic_ns,
        name: str = "LeakyBucketRateLimiter",
    ):
        """
        Initialize a full leaky bucket.

        Args:
            capacity: Maximum number of credits
            leak_interval: Seconds (or a timedelta) needed to replenish one credit
            clock: Monotonic time source returning integer nanoseconds
            name: Name used for logging

        Raises:
            ConfigurationError: If capacity or leak_interval is invalid.
        """
        self.name = name
        self._logger = logger.bind(name=f"{__name__}.{name}")

        try:
            self.capacity = validate_capacity(capacity)
            self._leak_interval_ns = validate_interval_ns(leak_interval, "leak_interval")
        except ConfigurationError as e:
            self._logger.error(f"Invalid leaky bucket configuration: {e.message}")
            raise

        self._clock = clock
        self._lock = threading.Lock()
        self._tokens = self.capacity
        self._last_leak = clock()
        self._allowed = 0
        self._denied = 0

        self._logger.info(f"Leaky bucket created: capacity={self.capacity}, leak_interval={self.leak_interval}s")

    @property
    def leak_interval(self) -> float:
        """Seconds needed to replenish one credit."""
        return self._leak_interval_ns / NANOSECONDS_PER_SECOND

    @property
    def available(self) -> int:
        """Credits that the next admission check would see, without applying them."""
        with self._lock:
            tokens_to_add = self._pending_credits(self._clock())
            return min(self.capacity, self._tokens + tokens_to_add)

    def consume(self, request_id: Hashable | None = None) -> bool:
        """
        Apply elapsed-time replenishment, then try to spend one credit.

        Args:
            request_id: Optional identifier of the request, used for logging

        Returns:
            True if a credit was spent, False if the bucket was empty
        """
        with self._lock:
            tokens_to_add = self._pending_credits(self._clock())
            if tokens_to_add:
                self._tokens = min(self.capacity, self._tokens + tokens_to_add)
                self._last_leak += tokens_to_add * self._leak_interval_ns

            allowed = self._tokens > 0
            if allowed:
                self._tokens -= 1
                self._allowed += 1
            else:
                self._denied += 1

        if allowed:
            self._logger.debug("Request {} allowed", request_id)
        else:
            self._logger.debug("Request {} denied", request_id)
        return allowed

    def allow(self) -> bool:
        """Apply elapsed-time replenishment, then try to spend one credit."""
        return self.consume()

    def stats(self) -> RateLimiterStats:
        with self._lock:
            tokens_to_add = self._pending_credits(self._clock())
            available = min(self.capacity, self._tokens + tokens_to_add)
            allowed, denied = self._allowed, self._denied
        return RateLimiterStats(
            strategy=LimiterStrategy.LEAKY_BUCKET,
            capacity=self.capacity,
            available=available,
            allowed=allowed,
            denied=denied,
        )

    def _pending_credits(self, now: int) -> int:
        # Caller holds the lock. A clock reading behind last_leak yields nothing.
        elapsed = now - self._last_leak
        if elapsed <= 0:
            return 0
        return elapsed // self._leak_interval_ns
