# ABOUTME: Benchmark test configuration for rate limiter hot paths
# ABOUTME: Provides pytest-benchmark marker wiring for the benchmark directory

import pytest


def pytest_collection_modifyitems(config, items):
    """Add benchmark marker to all tests in benchmark directory."""
    for item in items:
        if "benchmark" in str(item.fspath):
            item.add_marker(pytest.mark.benchmark)
