# ABOUTME: In-memory token bucket rate limiter with background replenishment
# ABOUTME: Uses a bounded queue as both token store and synchronization primitive

import queue
import threading
import time
from typing import Hashable

from loguru import logger

from admission.exceptions import ConfigurationError, LimiterStateError
from admission.interfaces import AbstractRateLimiter
from admission.models import LimiterStrategy, RateLimiterStats
from admission.validators import Duration, validate_capacity, validate_interval, validate_refill_rate


class TokenBucketRateLimiter(AbstractRateLimiter):
    """
    Token bucket rate limiter refilled by a dedicated background thread.

    The bucket holds at most ``capacity`` tokens. Every ``refill_interval``
    seconds the background thread tries to add ``refill_rate`` tokens using
    non-blocking inserts; tokens that do not fit are discarded, never carried
    over to a later tick. Each admission check removes one token without
    blocking.

    Tokens live in a ``queue.Queue`` bounded by ``capacity``. Its non-blocking
    put and get operations are atomic, so any number of consumer threads and
    the refill thread share it without an additional lock, and the count can
    never go below zero or above capacity.

    Features:
    - Burst admission up to capacity, then a steady rate of refill_rate per interval
    - Non-blocking admission checks (denial is an immediate False)
    - Drift-free tick schedule; missed ticks are skipped, not replayed
    - One-shot stop that joins the refill thread

    Lifecycle:
    The bucket starts full. ``stop()`` ends replenishment exactly once; the
    tokens left in the bucket can still be consumed afterwards. Calling
    ``stop()`` a second time is a programming error and raises
    ``LimiterStateError``. The refill thread keeps the limiter alive until it
    is stopped, so owners must call ``stop()`` or use the limiter as a context
    manager.
    """

    def __init__(
        self,
        capacity: int,
        refill_rate: int,
        refill_interval: Duration,
        name: str = "TokenBucketRateLimiter",
    ):
        """
        Initialize the token bucket and start its refill thread.

        Args:
            capacity: Maximum number of tokens the bucket can hold
            refill_rate: Number of tokens added per tick
            refill_interval: Seconds (or a timedelta) between ticks
            name: Name used for logging and for the refill thread

        Raises:
            ConfigurationError: If any parameter is invalid. No thread is started.
        """
        self.name = name
        self._logger = logger.bind(name=f"{__name__}.{name}")

        try:
            self.capacity = validate_capacity(capacity)
            self.refill_rate = validate_refill_rate(refill_rate)
            self.refill_interval = validate_interval(refill_interval, "refill_interval")
        except ConfigurationError as e:
            self._logger.error(f"Invalid token bucket configuration: {e.message}")
            raise

        self._tokens: queue.Queue[None] = queue.Queue(maxsize=self.capacity)
        for _ in range(self.capacity):
            self._tokens.put_nowait(None)

        # Admission counters
        self._stats_lock = threading.Lock()
        self._allowed = 0
        self._denied = 0

        self._stop_event = threading.Event()
        self._lifecycle_lock = threading.Lock()
        self._thread = threading.Thread(target=self._refill_loop, name=f"{name}-refill", daemon=True)
        self._thread.start()

        self._logger.info(
            f"Token bucket started: capacity={self.capacity}, refill_rate={self.refill_rate}, "
            f"refill_interval={self.refill_interval}s"
        )

    @property
    def available(self) -> int:
        """Number of tokens currently in the bucket."""
        return self._tokens.qsize()

    @property
    def stopped(self) -> bool:
        """Whether replenishment has been stopped."""
        return self._stop_event.is_set()

    def consume(self, request_id: Hashable | None = None) -> bool:
        """
        Try to take one token from the bucket without blocking.

        Args:
            request_id: Optional identifier of the request, used for logging

        Returns:
            True if a token was taken, False if the bucket was empty
        """
        try:
            self._tokens.get_nowait()
        except queue.Empty:
            self._record(False)
            self._logger.debug("Request {} denied, no available token", request_id)
            return False

        self._record(True)
        self._logger.debug("Request {} consumed one token. Remaining tokens: {}", request_id, self.available)
        return True

    def allow(self) -> bool:
        """Try to take one token from the bucket without blocking."""
        return self.consume()

    def stats(self) -> RateLimiterStats:
        with self._stats_lock:
            allowed, denied = self._allowed, self._denied
        return RateLimiterStats(
            strategy=LimiterStrategy.TOKEN_BUCKET,
            capacity=self.capacity,
            available=self.available,
            allowed=allowed,
            denied=denied,
            stopped=self.stopped,
        )

    def stop(self) -> None:
        """
        Stop background replenishment and wait for the refill thread to exit.

        The number of available tokens is left unchanged.

        Raises:
            LimiterStateError: If the limiter has already been stopped.
        """
        with self._lifecycle_lock:
            if self._stop_event.is_set():
                raise LimiterStateError(
                    f"Token bucket '{self.name}' is already stopped",
                    code="ALREADY_STOPPED",
                    details={"name": self.name},
                )
            self._stop_event.set()

        if self._thread is not threading.current_thread():
            self._thread.join()
        self._logger.info(f"Token bucket stopped with {self.available} of {self.capacity} tokens available")

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if not self.stopped:
            self.stop()

    def _record(self, allowed: bool) -> None:
        with self._stats_lock:
            if allowed:
                self._allowed += 1
            else:
                self._denied += 1

    def _refill(self) -> int:
        """
        Add up to refill_rate tokens without blocking.

        Returns:
            Number of tokens actually added
        """
        if self.refill_rate == 0:
            return 0

        added = 0
        for _ in range(self.refill_rate):
            try:
                self._tokens.put_nowait(None)
            except queue.Full:
                break
            added += 1

        if added == 0:
            self._logger.debug("Bucket full, no tokens added")
        else:
            self._logger.debug(
                "Added {} of {} tokens. Total available tokens: {}", added, self.refill_rate, self.available
            )
        return added

    def _refill_loop(self) -> None:
        """Refill on a fixed cadence until the stop event is set."""
        interval = self.refill_interval
        next_tick = time.monotonic() + interval

        while not self._stop_event.wait(max(0.0, next_tick - time.monotonic())):
            self._refill()

            next_tick += interval
            now = time.monotonic()
            if next_tick <= now:
                skipped = int((now - next_tick) // interval) + 1
                next_tick += skipped * interval
                self._logger.warning(f"Refill thread fell behind, skipped {skipped} tick(s)")

        self._logger.debug("Refill thread exiting")
