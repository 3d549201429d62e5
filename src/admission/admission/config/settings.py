# ABOUTME: Main configuration composition for the admission control library
# ABOUTME: Assembles all configuration classes into a single, accessible object

from functools import lru_cache

from pydantic import Field

from ._base import BaseAdmissionSettings
from .rate_limits import RateLimiterSettings


class AdmissionSettings(BaseAdmissionSettings):
    """Represents the complete, composed configuration.

    Inherits the application-level settings from `BaseAdmissionSettings` and
    nests the rate limiter defaults, which keep their own environment prefix.

    The `get_settings` function provides a singleton instance of this class.
    """

    rate_limit: RateLimiterSettings = Field(
        default_factory=RateLimiterSettings,
        description="Defaults used by the rate limiter factory.",
    )


@lru_cache
def get_settings() -> AdmissionSettings:
    """Provides a singleton instance of the settings.

    The instance is created once and cached so environment variables and the
    `.env` file are read a single time.

    Returns:
        A single, cached instance of the AdmissionSettings class.
    """
    return AdmissionSettings()
