"""Config – 12-factor settings and loaders."""

from todo_bridge.config.errors import ConfigError, InvalidSettingValueError, MissingRequiredSettingError
from todo_bridge.config.settings import (
    BridgeSettings,
    DotenvSettingsLoader,
    EnvSettingsLoader,
    SettingsLoader,
)

__all__ = [
    "BridgeSettings",
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "SettingsLoader",
]
