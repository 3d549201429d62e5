# ABOUTME: NoOp implementation of AbstractRateLimiter that always admits
# ABOUTME: Provides a drop-in limiter for tests and for disabling admission control

import threading

from admission.interfaces import AbstractRateLimiter
from admission.models import LimiterStrategy, RateLimiterStats


class NoOpRateLimiter(AbstractRateLimiter):
    """
    No-operation implementation of AbstractRateLimiter.

    Every admission check succeeds. No tokens are tracked, so the reported
    capacity and availability are zero; only the admission counter moves.

    Use Cases:
    - Testing environments where rate limiting should be bypassed
    - Performance benchmarking without rate limiting overhead
    - Deployments that turn admission control off through configuration
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._allowed = 0

    def allow(self) -> bool:
        """Always admit."""
        with self._lock:
            self._allowed += 1
        return True

    def stats(self) -> RateLimiterStats:
        with self._lock:
            allowed = self._allowed
        return RateLimiterStats(strategy=LimiterStrategy.NOOP, capacity=0, available=0, allowed=allowed)
