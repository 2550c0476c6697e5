"""
Settings-specific exceptions for day picker configuration.

Raised while building :class:`~daypicker.config.settings.DayPickerSettings`
from keyword arguments, environment variables and the optional YAML file.
"""

from typing import Any, Optional

from ..utils.exceptions import DayPickerError


class SettingsError(DayPickerError):
    """Base exception for all settings-related errors.

    Example:
        >>> raise SettingsError("Configuration failed", {"source": "yaml"})
    """


class SettingsValidationError(SettingsError):
    """Exception raised when settings validation fails.

    Args:
        message: Human-readable validation error description
        field_name: Name of the field that failed validation
        field_value: The invalid value that caused the error
        validation_errors: List of specific validation error messages
        details: Additional context about the validation failure

    Example:
        >>> raise SettingsValidationError(
        ...     "Invalid month count",
        ...     field_name="number_of_months",
        ...     field_value=0,
        ...     validation_errors=["Input should be greater than or equal to 1"]
        ... )
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        field_value: Optional[Any] = None,
        validation_errors: Optional[list[str]] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.field_name = field_name
        self.field_value = field_value
        self.validation_errors = validation_errors or []

        error_details = details or {}
        if field_name:
            error_details["field_name"] = field_name
        if field_value is not None:
            error_details["field_value"] = str(field_value)
        if self.validation_errors:
            error_details["validation_errors"] = self.validation_errors

        super().__init__(message, error_details)
