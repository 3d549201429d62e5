# ABOUTME: Unit tests for TokenBucketRateLimiter implementation
# ABOUTME: Tests capacity bounds, refill discard policy, stop lifecycle and statistics

import threading
import time
from datetime import timedelta

import pytest

from admission.exceptions import ConfigurationError, LimiterStateError, RateLimitExceededException
from admission.implementations.memory.token_bucket import TokenBucketRateLimiter
from admission.models import LimiterStrategy


def _refill_threads(name: str):
    return [t for t in threading.enumerate() if t.name == f"{name}-refill"]


class TestTokenBucketConstruction:
    """Test construction and parameter validation."""

    @pytest.mark.unit
    def test_initialization(self, token_bucket_factory):
        """Test token bucket starts full with one refill thread."""
        limiter = token_bucket_factory(capacity=10, refill_rate=2, refill_interval=1.5, name="init")

        assert limiter.capacity == 10
        assert limiter.refill_rate == 2
        assert limiter.refill_interval == 1.5
        assert limiter.available == 10
        assert limiter.stopped is False
        assert len(_refill_threads("init")) == 1

    @pytest.mark.unit
    def test_timedelta_interval(self, token_bucket_factory):
        """Test refill interval given as a timedelta is converted to seconds."""
        limiter = token_bucket_factory(refill_interval=timedelta(milliseconds=250))
        assert limiter.refill_interval == 0.25

    @pytest.mark.unit
    def test_zero_refill_rate_allowed(self, token_bucket_factory):
        """Test a refill rate of zero is a valid configuration."""
        limiter = token_bucket_factory(refill_rate=0)
        assert limiter.refill_rate == 0

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "kwargs, code",
        [
            ({"capacity": 0, "refill_rate": 1, "refill_interval": 1.0}, "INVALID_CAPACITY"),
            ({"capacity": -3, "refill_rate": 1, "refill_interval": 1.0}, "INVALID_CAPACITY"),
            ({"capacity": 2.5, "refill_rate": 1, "refill_interval": 1.0}, "INVALID_CAPACITY"),
            ({"capacity": True, "refill_rate": 1, "refill_interval": 1.0}, "INVALID_CAPACITY"),
            ({"capacity": 5, "refill_rate": -1, "refill_interval": 1.0}, "INVALID_REFILL_RATE"),
            ({"capacity": 5, "refill_rate": 1, "refill_interval": 0}, "INVALID_INTERVAL"),
            ({"capacity": 5, "refill_rate": 1, "refill_interval": -2.0}, "INVALID_INTERVAL"),
            ({"capacity": 5, "refill_rate": 1, "refill_interval": timedelta(0)}, "INVALID_INTERVAL"),
            ({"capacity": 5, "refill_rate": 1, "refill_interval": "1s"}, "INVALID_INTERVAL"),
        ],
    )
    def test_invalid_configuration(self, kwargs, code):
        """Test invalid parameters raise ConfigurationError before any thread starts."""
        with pytest.raises(ConfigurationError) as exc_info:
            TokenBucketRateLimiter(**kwargs, name="invalid")

        assert exc_info.value.code == code
        assert _refill_threads("invalid") == []


class TestTokenBucketConsume:
    """Test non-blocking token consumption."""

    @pytest.mark.unit
    def test_consume_success(self, token_bucket_factory):
        """Test consuming decrements available by one."""
        limiter = token_bucket_factory(capacity=3)

        assert limiter.consume(1) is True
        assert limiter.available == 2

    @pytest.mark.unit
    def test_consume_until_empty(self, token_bucket_factory):
        """Test at most capacity consumes succeed with no elapsed refill."""
        limiter = token_bucket_factory(capacity=5)

        results = [limiter.consume(request_id) for request_id in range(10)]

        assert results == [True] * 5 + [False] * 5
        assert limiter.available == 0

    @pytest.mark.unit
    def test_consume_on_empty_returns_immediately(self, token_bucket_factory):
        """Test denial does not block the caller."""
        limiter = token_bucket_factory(capacity=1)
        limiter.consume()

        started = time.monotonic()
        assert limiter.consume() is False
        assert time.monotonic() - started < 0.5

    @pytest.mark.unit
    def test_allow_matches_consume(self, token_bucket_factory):
        """Test allow() takes tokens from the same bucket."""
        limiter = token_bucket_factory(capacity=2)

        assert limiter.allow() is True
        assert limiter.consume("req") is True
        assert limiter.allow() is False

    @pytest.mark.unit
    def test_consume_or_raise(self, token_bucket_factory):
        """Test consume_or_raise raises with statistics once empty."""
        limiter = token_bucket_factory(capacity=1)

        limiter.consume_or_raise("first")
        with pytest.raises(RateLimitExceededException) as exc_info:
            limiter.consume_or_raise("second")

        assert exc_info.value.code == "RATE_LIMIT_EXCEEDED"
        assert exc_info.value.details["request_id"] == "second"
        assert exc_info.value.details["available"] == 0
        assert exc_info.value.details["strategy"] == "token_bucket"


class TestTokenBucketRefill:
    """Test the per-tick refill policy."""

    @pytest.mark.unit
    def test_refill_adds_up_to_rate(self, token_bucket_factory):
        """Test a tick adds refill_rate tokens when there is room."""
        limiter = token_bucket_factory(capacity=5, refill_rate=2)
        for _ in range(5):
            limiter.consume()

        assert limiter._refill() == 2
        assert limiter.available == 2

    @pytest.mark.unit
    def test_refill_discards_excess(self, token_bucket_factory):
        """Test tokens that do not fit are lost, not banked for later ticks."""
        limiter = token_bucket_factory(capacity=5, refill_rate=4)
        limiter.consume()

        assert limiter._refill() == 1
        assert limiter.available == 5

        # Nothing was banked from the previous tick
        for _ in range(5):
            limiter.consume()
        assert limiter._refill() == 4
        assert limiter.available == 4

    @pytest.mark.unit
    def test_refill_on_full_bucket(self, token_bucket_factory):
        """Test a tick on a full bucket adds nothing."""
        limiter = token_bucket_factory(capacity=3, refill_rate=2)

        assert limiter._refill() == 0
        assert limiter.available == 3

    @pytest.mark.unit
    def test_zero_refill_rate_never_adds(self, token_bucket_factory):
        """Test a zero refill rate leaves the bucket unchanged."""
        limiter = token_bucket_factory(capacity=3, refill_rate=0)
        limiter.consume()

        assert limiter._refill() == 0
        assert limiter.available == 2

    @pytest.mark.unit
    @pytest.mark.concurrency
    def test_background_refill(self, token_bucket_factory):
        """Test the refill thread adds tokens on its own."""
        limiter = token_bucket_factory(capacity=3, refill_rate=1, refill_interval=0.05)
        while limiter.consume():
            pass

        deadline = time.monotonic() + 2.0
        while limiter.available == 0 and time.monotonic() < deadline:
            time.sleep(0.01)

        assert 0 < limiter.available <= 3

    @pytest.mark.unit
    @pytest.mark.concurrency
    def test_background_refill_never_exceeds_capacity(self, token_bucket_factory):
        """Test many ticks on a nearly full bucket never exceed capacity."""
        limiter = token_bucket_factory(capacity=4, refill_rate=10, refill_interval=0.01)

        for _ in range(20):
            assert 0 <= limiter.available <= 4
            time.sleep(0.01)


class TestTokenBucketLifecycle:
    """Test stop semantics and context manager support."""

    @pytest.mark.unit
    def test_stop_joins_thread_and_keeps_tokens(self, token_bucket_factory):
        """Test stop ends the refill thread without touching available tokens."""
        limiter = token_bucket_factory(capacity=5, name="stopper")
        limiter.consume()
        limiter.consume()

        limiter.stop()

        assert limiter.stopped is True
        assert _refill_threads("stopper") == []
        assert limiter.available == 3

    @pytest.mark.unit
    def test_stop_is_prompt(self, token_bucket_factory):
        """Test stop does not wait for the next tick."""
        limiter = token_bucket_factory(refill_interval=3600.0)

        started = time.monotonic()
        limiter.stop()
        assert time.monotonic() - started < 1.0

    @pytest.mark.unit
    @pytest.mark.concurrency
    def test_no_refill_after_stop(self, token_bucket_factory):
        """Test replenishment does not happen once stopped."""
        limiter = token_bucket_factory(capacity=3, refill_rate=3, refill_interval=0.02)
        limiter.stop()
        while limiter.consume():
            pass

        time.sleep(0.1)
        assert limiter.available == 0

    @pytest.mark.unit
    def test_consume_after_stop(self, token_bucket_factory):
        """Test remaining tokens can still be consumed after stop."""
        limiter = token_bucket_factory(capacity=2)
        limiter.stop()

        assert limiter.consume() is True
        assert limiter.consume() is True
        assert limiter.consume() is False

    @pytest.mark.unit
    def test_stop_twice_raises(self, token_bucket_factory):
        """Test a second stop is reported as a lifecycle error."""
        limiter = token_bucket_factory(name="twice")
        limiter.stop()

        with pytest.raises(LimiterStateError) as exc_info:
            limiter.stop()

        assert exc_info.value.code == "ALREADY_STOPPED"
        assert exc_info.value.details == {"name": "twice"}

    @pytest.mark.unit
    def test_context_manager_stops(self):
        """Test leaving the with block stops the limiter."""
        with TokenBucketRateLimiter(2, 1, 3600.0) as limiter:
            assert limiter.consume() is True

        assert limiter.stopped is True

    @pytest.mark.unit
    def test_context_manager_after_manual_stop(self):
        """Test the with block tolerates a stop issued inside it."""
        with TokenBucketRateLimiter(2, 1, 3600.0) as limiter:
            limiter.stop()

        assert limiter.stopped is True


class TestTokenBucketStats:
    """Test statistics snapshots."""

    @pytest.mark.unit
    def test_stats_counters(self, token_bucket_factory):
        """Test stats report grants, denials and availability."""
        limiter = token_bucket_factory(capacity=2)
        for _ in range(5):
            limiter.consume()

        stats = limiter.stats()

        assert stats.strategy == LimiterStrategy.TOKEN_BUCKET
        assert stats.capacity == 2
        assert stats.available == 0
        assert stats.allowed == 2
        assert stats.denied == 3
        assert stats.total == 5
        assert stats.stopped is False

    @pytest.mark.unit
    def test_stats_after_stop(self, token_bucket_factory):
        """Test stats report the stopped state."""
        limiter = token_bucket_factory()
        limiter.stop()

        assert limiter.stats().stopped is True

    @pytest.mark.unit
    def test_stats_does_not_consume(self, token_bucket_factory):
        """Test reading stats leaves tokens in place."""
        limiter = token_bucket_factory(capacity=3)

        for _ in range(3):
            limiter.stats()

        assert limiter.available == 3


class TestTokenBucketLogging:
    """Test log output levels."""

    @pytest.mark.unit
    def test_denial_logged_at_debug(self, token_bucket_factory, log_records):
        """Test denials are debug records, never warnings or errors."""
        limiter = token_bucket_factory(capacity=1)
        limiter.consume("a")
        limiter.consume("b")

        denial_records = [r for r in log_records if "denied" in r["message"]]
        assert len(denial_records) == 1
        assert denial_records[0]["level"].name == "DEBUG"
        assert "b" in denial_records[0]["message"]

    @pytest.mark.unit
    def test_invalid_configuration_logged(self, log_records):
        """Test configuration failures are logged as errors before raising."""
        with pytest.raises(ConfigurationError):
            TokenBucketRateLimiter(0, 1, 1.0)

        assert any(r["level"].name == "ERROR" for r in log_records)
