# ABOUTME: Loguru configuration for the admission control library
# ABOUTME: Derives console and file sinks from the environment preset or an explicit LoggerConfig

import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger
from pydantic import BaseModel

from ._base import BaseAdmissionSettings
from .settings import get_settings

# The package logs under this name; sinks only see its records once enabled.
LIBRARY_NAME = "admission"


class LoggerConfig(BaseModel):
    """Configuration for loguru logger."""

    # Console output configuration
    console_enabled: bool = True
    console_level: str = "INFO"
    console_format: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )
    console_colorize: bool = True
    console_serialize: bool = False
    console_backtrace: bool = True
    console_diagnose: bool = True

    # File output configuration
    file_enabled: bool = False
    file_level: str = "DEBUG"
    file_path: Union[str, Path] = "logs/admission.log"
    file_format: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}"
    file_rotation: str = "100 MB"
    file_retention: str = "30 days"
    file_compression: str = "gz"
    file_serialize: bool = False

    # Performance settings
    enqueue: bool = True  # Async logging
    catch: bool = True  # Catch exceptions in logging


# Sink options applied for each runtime environment
ENVIRONMENT_PRESETS = {
    "development": {
        "console_colorize": True,
        "console_backtrace": True,
        "console_diagnose": True,
    },
    "staging": {
        "console_colorize": False,
        "console_backtrace": True,
        "console_diagnose": False,
    },
    "production": {
        "console_colorize": False,
        "console_backtrace": False,
        "console_diagnose": False,
        "file_enabled": True,
        "file_serialize": True,
    },
}


def logger_config_from_settings(settings: BaseAdmissionSettings) -> LoggerConfig:
    """
    Build a logger configuration from application settings.

    ``ENV`` selects the sink preset, ``LOG_LEVEL`` sets the level of every
    sink (``DEBUG`` forces ``DEBUG``), ``LOG_FORMAT == "json"`` serializes
    records, and ``APP_NAME`` names the log file.

    Args:
        settings: Application settings

    Returns:
        Logger configuration for setup_logging()
    """
    level = "DEBUG" if settings.DEBUG else settings.LOG_LEVEL
    options = dict(ENVIRONMENT_PRESETS[settings.ENV])

    if settings.LOG_FORMAT == "json":
        options["console_serialize"] = True
        options["file_serialize"] = True

    return LoggerConfig(
        console_level=level,
        file_level=level,
        file_path=Path("logs") / f"{settings.APP_NAME}.log",
        **options,
    )


def setup_logging(config: Optional[LoggerConfig] = None, settings: Optional[BaseAdmissionSettings] = None) -> None:
    """
    Setup loguru logger with the specified configuration.

    Replaces every existing handler and enables the library's log records,
    which are disabled until an application opts in.

    Args:
        config: Logger configuration. If None, it is derived from settings.
        settings: Application settings used when config is None. Defaults to get_settings().
    """
    if config is None:
        config = logger_config_from_settings(settings or get_settings())

    # Remove default handler
    logger.remove()

    if config.console_enabled:
        logger.add(
            sys.stdout,
            level=config.console_level,
            format=config.console_format,
            colorize=config.console_colorize,
            serialize=config.console_serialize,
            backtrace=config.console_backtrace,
            diagnose=config.console_diagnose,
            enqueue=config.enqueue,
            catch=config.catch,
        )

    if config.file_enabled:
        # Ensure log directory exists
        log_path = Path(config.file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            config.file_path,
            level=config.file_level,
            format=config.file_format,
            rotation=config.file_rotation,
            retention=config.file_retention,
            compression=config.file_compression,
            serialize=config.file_serialize,
            enqueue=config.enqueue,
            catch=config.catch,
        )

    logger.enable(LIBRARY_NAME)


def get_logger(name: str):
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance bound to the specified name
    """
    return logger.bind(name=name)


def configure_for_testing() -> None:
    """Configure logging for testing environment."""
    logger.remove()
    logger.add(
        sys.stdout,
        level="DEBUG",
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <5}</level> | <cyan>{name}</cyan> | <level>{message}</level>",
        colorize=True,
        backtrace=False,
        diagnose=False,
        enqueue=False,
        catch=False,
    )
    logger.enable(LIBRARY_NAME)


def configure_for_production() -> None:
    """Configure logging for production environment."""
    setup_logging(LoggerConfig(console_level="INFO", file_level="INFO", **ENVIRONMENT_PRESETS["production"]))


def configure_for_development() -> None:
    """Configure logging for development environment."""
    setup_logging(LoggerConfig(console_level="DEBUG", **ENVIRONMENT_PRESETS["development"]))
