"""
Configuration Management for Bill Splitter

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here. The splitting
core takes no configuration at all; only logging and the file layer do.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """structlog output configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SPLITBILL_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    level: str = Field(
        default="INFO",
        description="Minimum log level (DEBUG, INFO, WARNING, ERROR)"
    )
    format: str = Field(
        default="json",
        pattern="^(json|console)$",
        description="Render log lines as JSON or for a terminal"
    )

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalise and check the level name."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class ProcessingSettings(BaseSettings):
    """
    File processing settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="SPLITBILL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    input_glob: str = Field(
        default="*.json",
        description="Pattern selecting bill files in batch mode"
    )
    output_indent: int = Field(
        default=2,
        ge=0,
        le=8,
        description="Indentation of written JSON"
    )
    encoding: str = Field(
        default="utf-8",
        description="Encoding for reading and writing bill files"
    )

    # Validation thresholds
    max_tip_percentage_warning: float = Field(
        default=50.0,
        ge=0.0,
        description="Tip percentages above this are flagged as suspicious"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()

    @property
    def processing(self) -> ProcessingSettings:
        return ProcessingSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()
