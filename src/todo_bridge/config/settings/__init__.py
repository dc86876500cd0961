"""Config settings – 12-factor env-based configuration."""
from todo_bridge.config.settings.app import BridgeSettings
from todo_bridge.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = ["BridgeSettings", "DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader"]
