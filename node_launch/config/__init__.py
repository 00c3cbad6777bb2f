"""Configuration management for launch resolution."""

from node_launch.config.launch_config import LaunchConfiguration
from node_launch.config.settings import DEFAULT_SETTINGS
from node_launch.config.settings import ResolverSettings
from node_launch.config.settings import SettingsContext
from node_launch.config.settings import get_settings
from node_launch.config.settings import reset_settings
from node_launch.config.settings import set_settings
from node_launch.config.settings import settings_context
from node_launch.config.settings import update_settings

__all__ = [
    "DEFAULT_SETTINGS",
    "LaunchConfiguration",
    "ResolverSettings",
    "SettingsContext",
    "get_settings",
    "reset_settings",
    "set_settings",
    "settings_context",
    "update_settings",
]
