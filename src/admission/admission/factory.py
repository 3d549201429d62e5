# ABOUTME: Factory for building rate limiters from a strategy name and settings
# ABOUTME: Lets callers select a limiter strategy without importing implementations

from loguru import logger

from admission.config.rate_limits import RateLimiterSettings
from admission.config.settings import get_settings
from admission.exceptions import ConfigurationError
from admission.implementations import LeakyBucketRateLimiter, NoOpRateLimiter, TokenBucketRateLimiter
from admission.interfaces import AbstractRateLimiter
from admission.models import LimiterStrategy


def create_rate_limiter(
    strategy: LimiterStrategy | str | None = None,
    settings: RateLimiterSettings | None = None,
) -> AbstractRateLimiter:
    """
    Build a rate limiter for the requested strategy.

    Args:
        strategy: Strategy to build. Defaults to ``settings.strategy``.
        settings: Limiter parameters. Defaults to ``get_settings().rate_limit``.

    Returns:
        A new limiter. Token bucket limiters are already refilling and must be stopped by the caller.

    Raises:
        ConfigurationError: If the strategy is unknown or a parameter is invalid.
    """
    settings = settings or get_settings().rate_limit
    if strategy is None:
        strategy = settings.strategy

    if isinstance(strategy, str) and not isinstance(strategy, LimiterStrategy):
        strategy = strategy.strip().lower().replace("-", "_")

    try:
        strategy = LimiterStrategy(strategy)
    except ValueError as e:
        raise ConfigurationError(
            f"Unknown rate limiter strategy: {strategy!r}",
            code="UNKNOWN_STRATEGY",
            details={"strategy": strategy, "supported": [s.value for s in LimiterStrategy]},
        ) from e

    logger.debug(f"Creating {strategy.value} rate limiter")

    if strategy is LimiterStrategy.TOKEN_BUCKET:
        return TokenBucketRateLimiter(
            capacity=settings.capacity,
            refill_rate=settings.refill_rate,
            refill_interval=settings.refill_interval,
        )
    if strategy is LimiterStrategy.LEAKY_BUCKET:
        return LeakyBucketRateLimiter(capacity=settings.capacity, leak_interval=settings.leak_interval)
    return NoOpRateLimiter()
