"""Settings management using Pydantic for type validation and configuration."""

import logging
import os
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from ..utils.dates import months_between
from .exceptions import SettingsError, SettingsValidationError

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV = "DAYPICKER_CONFIG_FILE"
DEFAULT_CONFIG_FILE = Path.home() / ".config" / "daypicker" / "config.yaml"

_LOG_LEVELS = {"DEBUG", "VERBOSE", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Orientation(str, Enum):
    """How the caller lays out multiple months."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    # Console Logging
    console_enabled: bool = Field(default=True, description="Enable console logging")
    console_level: str = Field(
        default="INFO",
        description="Console log level: DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL",
    )
    console_colors: bool = Field(
        default=True, description="Enable colored console output (auto-detected)"
    )

    # File Logging
    file_enabled: bool = Field(default=False, description="Enable file logging")
    file_level: str = Field(default="DEBUG", description="File log level")
    file_directory: Optional[str] = Field(
        default=None, description="Log directory (defaults to ~/.local/share/daypicker/logs)"
    )
    file_prefix: str = Field(default="daypicker", description="Log file prefix")
    max_log_files: int = Field(default=5, ge=1, description="Maximum number of log files to keep")

    # Third-party Libraries
    third_party_level: str = Field(
        default="WARNING", description="Log level for third-party libraries"
    )

    @field_validator("console_level", "file_level", "third_party_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level {value!r}")
        return level


class YamlFileSource(PydanticBaseSettingsSource):
    """Reads settings from a YAML file with ``yaml.safe_load``.

    The file is the one passed as ``config_file``, else the one named by
    ``DAYPICKER_CONFIG_FILE``, else ``~/.config/daypicker/config.yaml`` when
    it exists.
    """

    def __init__(self, settings_cls: type[BaseSettings], config_file: Optional[Any] = None):
        super().__init__(settings_cls)
        self.config_file = config_file

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        # Values are produced all at once by __call__.
        return None, field_name, False

    def _find_config_file(self) -> Optional[Path]:
        explicit = self.config_file or os.environ.get(CONFIG_FILE_ENV)
        if explicit:
            path = Path(explicit).expanduser()
            if not path.exists():
                raise SettingsError("Config file not found", {"path": str(path)})
            return path
        if DEFAULT_CONFIG_FILE.exists():
            return DEFAULT_CONFIG_FILE
        return None

    def __call__(self) -> dict[str, Any]:
        config_file = self._find_config_file()
        if config_file is None:
            return {}

        try:
            with open(config_file, encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Could not load YAML config from {config_file}: {e}")
            return {}

        if not config_data:
            return {}
        if not isinstance(config_data, dict):
            logger.warning(f"Ignoring YAML config {config_file}: top level is not a mapping")
            return {}

        fields = self.settings_cls.model_fields
        unknown = sorted(set(config_data) - set(fields))
        if unknown:
            logger.warning(f"Ignoring unknown keys in {config_file}: {', '.join(unknown)}")
        logger.debug(f"Loaded settings from {config_file}")
        return {key: value for key, value in config_data.items() if key in fields}


class DayPickerSettings(BaseSettings):
    """Calendar settings with environment variable and YAML support.

    Priority: keyword arguments > environment > .env > YAML file > defaults.
    """

    # Layout
    number_of_months: int = Field(default=1, ge=1, description="Number of visible months")
    orientation: Orientation = Field(
        default=Orientation.HORIZONTAL, description="Layout: horizontal or vertical"
    )
    enable_outside_days: bool = Field(
        default=False, description="Show days of adjacent months in each grid"
    )
    vertical_border_spacing: int = Field(
        default=0, ge=0, description="Layout-only spacing passed through to the renderer"
    )

    # Locale
    locale: str = Field(default="en", description="Locale code, e.g. en-US, pt-BR, zh-CN")
    month_format: Optional[str] = Field(
        default=None, description="Month caption template, e.g. 'MMMM yyyy' or 'yyyy[年]MMMM'"
    )
    first_day_of_week: Optional[int] = Field(
        default=None, ge=0, le=6, description="Override the locale week start (0=Monday)"
    )

    # Navigation
    transition_duration: int = Field(
        default=300, ge=0, description="Month transition duration in milliseconds"
    )
    min_month: Optional[date] = Field(default=None, description="Earliest navigable month")
    max_month: Optional[date] = Field(default=None, description="Latest navigable month")

    # Selection
    keep_open_on_date_select: bool = Field(
        default=False,
        description="Stay focused after a date is selected; by default a selection unfocuses",
    )

    config_file: Optional[Path] = Field(default=None, description="YAML settings file")

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings, description="Logging settings"
    )

    model_config = SettingsConfigDict(
        env_prefix="DAYPICKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _check_month_bounds(self) -> "DayPickerSettings":
        if not (self.min_month and self.max_month):
            return self
        span = months_between(self.min_month, self.max_month) + 1
        if span < 1:
            raise ValueError(f"min_month {self.min_month} is after max_month {self.max_month}")
        if span < self.number_of_months:
            raise ValueError(
                f"min_month {self.min_month} to max_month {self.max_month} spans {span} "
                f"month(s), fewer than number_of_months={self.number_of_months}"
            )
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        init_kwargs = getattr(init_settings, "init_kwargs", {}) or {}
        yaml_settings = YamlFileSource(settings_cls, init_kwargs.get("config_file"))
        return (init_settings, env_settings, dotenv_settings, yaml_settings, file_secret_settings)

    @property
    def log_directory(self) -> Path:
        """Directory for log files."""
        if self.logging.file_directory:
            return Path(self.logging.file_directory).expanduser()
        return Path.home() / ".local" / "share" / "daypicker" / "logs"


def load_settings(**overrides: Any) -> DayPickerSettings:
    """Build settings, converting validation failures to settings errors.

    Args:
        **overrides: Field values that take priority over every other source

    Raises:
        SettingsValidationError: If any value fails validation
        SettingsError: If an explicitly named config file does not exist
    """
    try:
        return DayPickerSettings(**overrides)
    except ValidationError as e:
        errors = e.errors()
        first = errors[0] if errors else {}
        field_name = ".".join(str(part) for part in first.get("loc", ())) or None
        raise SettingsValidationError(
            "Invalid day picker settings",
            field_name=field_name,
            field_value=first.get("input") if field_name else None,
            validation_errors=[
                f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
                for err in errors
            ],
        ) from e
