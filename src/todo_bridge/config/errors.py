"""Config – errors raised while loading or validating BridgeSettings.

Every config error is fatal at startup; ``todo-bridge`` exits with status 2.
"""
from __future__ import annotations

from todo_bridge.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A field without a default has no environment variable."""

    default_code = "missing_required_setting"

    def __init__(self, env_key: str) -> None:
        super().__init__(f"{env_key} is not set", detail={"env_key": env_key})
        self.env_key = env_key


class InvalidSettingValueError(ConfigError):
    """A setting could not be coerced, or failed BridgeSettings validation.

    ``setting_name`` is the dataclass field; ``env_key`` the variable it is
    read from, when the value came from the environment.
    """

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str, *, env_key: str | None = None) -> None:
        shown = env_key or setting_name
        super().__init__(
            f"{shown}={value!r} is invalid: {reason}",
            detail={"setting": setting_name, "env_key": env_key, "reason": reason},
        )
        self.setting_name = setting_name
        self.env_key = env_key
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
