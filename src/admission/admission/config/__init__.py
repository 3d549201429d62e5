# ABOUTME: Configuration package initialization
# ABOUTME: Exports configuration classes and logging utilities for the admission library

from admission.config.settings import AdmissionSettings, get_settings
from admission.config._base import BaseAdmissionSettings
from admission.config.rate_limits import RateLimiterSettings
from admission.config.logging import (
    LoggerConfig,
    logger_config_from_settings,
    setup_logging,
    get_logger,
    configure_for_testing,
    configure_for_production,
    configure_for_development,
)

__all__ = [
    "AdmissionSettings",
    "BaseAdmissionSettings",
    "RateLimiterSettings",
    "get_settings",
    "LoggerConfig",
    "logger_config_from_settings",
    "setup_logging",
    "get_logger",
    "configure_for_testing",
    "configure_for_production",
    "configure_for_development",
]
