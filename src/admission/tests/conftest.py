# ABOUTME: pytest configuration for admission tests
# ABOUTME: Configures per-marker timeouts and shared limiter fixtures

from typing import Callable, List
from unittest.mock import Mock

import pytest
from loguru import logger

from admission.implementations import TokenBucketRateLimiter


def pytest_collection_modifyitems(config, items):
    """Modify test items to add appropriate timeouts based on test type."""
    for item in items:
        # Respect an explicit timeout marker
        if item.get_closest_marker("timeout"):
            continue

        if item.get_closest_marker("unit"):
            item.add_marker(pytest.mark.timeout(20))
        elif any(item.get_closest_marker(mark) for mark in ["integration", "contract", "benchmark"]):
            item.add_marker(pytest.mark.timeout(60))
        # Other tests use the global default from pyproject.toml


@pytest.fixture
def fake_clock() -> Mock:
    """A controllable nanosecond clock reading 1000s; set ``return_value`` to move time."""
    return Mock(return_value=1_000_000_000_000)


@pytest.fixture
def token_bucket_factory() -> Callable[..., TokenBucketRateLimiter]:
    """Build token buckets that are stopped after the test if still running."""
    created: List[TokenBucketRateLimiter] = []

    def _create(capacity: int = 5, refill_rate: int = 2, refill_interval: float = 3600.0, **kwargs):
        limiter = TokenBucketRateLimiter(capacity, refill_rate, refill_interval, **kwargs)
        created.append(limiter)
        return limiter

    yield _create

    for limiter in created:
        if not limiter.stopped:
            limiter.stop()


@pytest.fixture
def log_records():
    """Capture loguru records emitted by the admission package."""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="TRACE", format="{message}")
    logger.enable("admission")
    yield records
    logger.remove(handler_id)
    logger.disable("admission")
