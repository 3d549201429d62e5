# ABOUTME: Rate limiter configuration loaded from the environment
# ABOUTME: Provides default strategy, capacity, refill and leak settings for the factory

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from admission.models import LimiterStrategy


class RateLimiterSettings(BaseSettings):
    """Default parameters used when building a limiter through the factory.

    Values are read once, when the settings object is created. Limiters copy
    them at construction and never re-read them.

    Environment variables use the ``ADMISSION_RATE_LIMIT_`` prefix, for
    example ``ADMISSION_RATE_LIMIT_CAPACITY=10``.

    Attributes:
        strategy: Which limiter the factory builds.
        capacity: Maximum tokens held at once.
        refill_rate: Tokens added per tick (token bucket).
        refill_interval: Seconds between refill ticks (token bucket).
        leak_interval: Seconds needed to replenish one credit (leaky bucket).
    """

    strategy: LimiterStrategy = Field(
        default=LimiterStrategy.TOKEN_BUCKET,
        description="Rate limiting strategy built by the factory.",
    )
    capacity: int = Field(default=5, gt=0, description="Maximum number of tokens held at once.")
    refill_rate: int = Field(default=2, ge=0, description="Tokens added per refill tick.")
    refill_interval: float = Field(default=2.0, gt=0, description="Seconds between refill ticks.")
    leak_interval: float = Field(default=0.5, gt=0, description="Seconds needed to replenish one credit.")

    model_config = SettingsConfigDict(
        env_prefix="ADMISSION_RATE_LIMIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("strategy", mode="before")
    @classmethod
    def validate_strategy_case_insensitive(cls, v):
        """Normalize strategy names, accepting dashes and common aliases.

        - token-bucket, token, tb -> token_bucket
        - leaky-bucket, leaky, lb -> leaky_bucket
        - none, disabled -> noop
        """
        if isinstance(v, str):
            v_norm = v.lower().strip().replace("-", "_")
            strategy_mapping = {
                "token": "token_bucket",
                "tb": "token_bucket",
                "leaky": "leaky_bucket",
                "lb": "leaky_bucket",
                "none": "noop",
                "disabled": "noop",
            }
            return strategy_mapping.get(v_norm, v_norm)
        return v
