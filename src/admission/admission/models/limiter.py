# ABOUTME: LimiterStrategy and RateLimiterStats models for rate limiter introspection
# ABOUTME: Contains the strategy enumeration and a read-only statistics snapshot

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LimiterStrategy(str, Enum):
    """
    Rate limiting strategy enumeration.

    Each value names one concrete limiter implementation that the factory
    can build.
    """

    TOKEN_BUCKET = "token_bucket"
    LEAKY_BUCKET = "leaky_bucket"
    NOOP = "noop"


class RateLimiterStats(BaseModel):
    """
    Point-in-time statistics for a rate limiter.

    A snapshot taken without changing admission state. Counters are cumulative
    since construction.
    """

    model_config = ConfigDict(frozen=True)

    strategy: LimiterStrategy = Field(description="Strategy of the limiter that produced this snapshot")
    capacity: int = Field(ge=0, description="Maximum number of tokens the limiter holds at once")
    available: int = Field(ge=0, description="Tokens available at the time of the snapshot")
    allowed: int = Field(default=0, ge=0, description="Number of admissions granted")
    denied: int = Field(default=0, ge=0, description="Number of admissions denied")
    stopped: bool = Field(default=False, description="Whether background replenishment has been stopped")

    @property
    def total(self) -> int:
        """Total number of admission checks performed."""
        return self.allowed + self.denied
