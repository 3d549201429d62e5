# ABOUTME: Base configuration classes for the admission control library
# ABOUTME: Provides fundamental configuration settings and validation logic

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAdmissionSettings(BaseSettings):
    """Defines the foundational configuration for applications embedding the limiters.

    Settings are loaded by `pydantic-settings` from environment variables or a
    `.env` file and are intended to be inherited by more specific settings
    classes.

    Attributes:
        APP_NAME: The name of the application, used for identification in logs.
        ENV: The runtime environment, which selects the logging preset.
        DEBUG: A flag to enable or disable debug mode.
        LOG_LEVEL: The minimum level for log messages to be processed.
        LOG_FORMAT: The format for log output, structured (JSON) or human-readable (txt).
        model_config: Pydantic's configuration dictionary, specifying how settings are loaded.
    """

    # Application Identity
    APP_NAME: str = Field(
        default="admission",
        description="The name of the application, used for identification in logs.",
    )

    # Environment Configuration
    ENV: Literal["development", "staging", "production"] = Field(
        default="development",
        description="The application's runtime environment. Controls debugging and logging verbosity.",
    )
    DEBUG: bool = Field(
        default=False,
        description="Flag to enable or disable debug mode. Should be False in production.",
    )

    # Logging Configuration
    LOG_LEVEL: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="The minimum level for log messages to be processed.",
    )
    LOG_FORMAT: Literal["json", "txt"] = Field(
        default="txt",
        description="The output format for logs. Use 'json' for production environments.",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("ENV", mode="before")
    @classmethod
    def validate_env_case_insensitive(cls, v: str) -> str:
        """Validate ENV field with case-insensitive mapping.

        Accepts common environment aliases and normalizes them:
        - dev, develop -> development
        - prod -> production
        - stage -> staging
        """
        if isinstance(v, str):
            v_lower = v.lower().strip()
            env_mapping = {
                "dev": "development",
                "develop": "development",
                "development": "development",
                "stage": "staging",
                "staging": "staging",
                "prod": "production",
                "production": "production",
            }
            return env_mapping.get(v_lower, v_lower)
        return v

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def validate_log_level_case_insensitive(cls, v: str) -> str:
        """Validate LOG_LEVEL field with case-insensitive normalization."""
        if isinstance(v, str):
            return v.upper().strip()
        return v

    @field_validator("LOG_FORMAT", mode="before")
    @classmethod
    def validate_log_format_case_insensitive(cls, v: str) -> str:
        """Validate LOG_FORMAT field with case-insensitive normalization."""
        if isinstance(v, str):
            v_lower = v.lower().strip()
            format_mapping = {
                "json": "json",
                "structured": "json",
                "txt": "txt",
                "text": "txt",
            }
            return format_mapping.get(v_lower, v_lower)
        return v
