"""Config validation errors.

Both carry the environment variable name so start-up failures point at the
exact setting an operator has to fix.
"""
from mp_callpush.kernel.errors import ConfigurationError


class MissingRequiredSettingError(ConfigurationError):
    """A required environment variable is unset or blank."""

    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"{setting_name} must be set", detail={"setting": setting_name})
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigurationError):
    """A setting is present but unusable.

    The raw value is kept on the instance and left out of the message; it
    may be a credential.
    """

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(f"{setting_name} {reason}", detail={"setting": setting_name, "reason": reason})
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigurationError", "InvalidSettingValueError", "MissingRequiredSettingError"]
