"""Settings domain exceptions."""

from src.core.domain.exceptions import ValidationError


class SettingsValidationError(ValidationError):
    """Raised when a settings update is rejected."""

    error = "Invalid settings"
