"""Configuration management.

Loads from an optional TOML config file + environment variables.
Uses pydantic-settings for validation and env var overriding.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from .errors import ConfigError

_LOG_FORMATS = ("json", "console")


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "console"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level

    @field_validator("log_format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        if value not in _LOG_FORMATS:
            raise ValueError(f"log_format must be one of: {', '.join(_LOG_FORMATS)}")
        return value


class Settings(BaseSettings):
    """Top-level settings.

    Overridden by ``VALUESET_*`` environment variables, e.g.
    ``VALUESET_OBSERVABILITY__LOG_LEVEL=DEBUG``.
    """

    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "VALUESET_", "env_nested_delimiter": "__"}

    def apply_logging(self) -> None:
        """Configure logging from the observability section."""
        from valueset.observability.logger import setup_logging

        setup_logging(
            level=self.observability.log_level,
            format=self.observability.log_format,
        )


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional). A missing file is
            ignored.
        overrides: Dict of overrides to apply on top.

    Raises:
        ConfigError: the file is not valid TOML or a value fails validation.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            import tomli

            try:
                with open(path, "rb") as f:
                    data = tomli.load(f)
            except tomli.TOMLDecodeError as exc:
                raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    if overrides:
        data.update(overrides)

    try:
        return Settings(**data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings: {exc}") from exc
