"""Config settings – 12-factor env-based configuration."""
from pwcli.config.settings.base import Settings
from pwcli.config.settings.factory import SettingsFactory
from pwcli.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["EnvSettingsLoader", "Settings", "SettingsFactory", "SettingsLoader"]
