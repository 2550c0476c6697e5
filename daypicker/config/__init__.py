"""Configuration package for day picker settings."""

from .exceptions import SettingsError, SettingsValidationError
from .settings import DayPickerSettings, LoggingSettings, Orientation, load_settings

__all__ = [
    "DayPickerSettings",
    "LoggingSettings",
    "Orientation",
    "SettingsError",
    "SettingsValidationError",
    "load_settings",
]
