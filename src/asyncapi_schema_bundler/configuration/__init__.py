"""Configuration domain exports."""

from .bundler_settings import BundlerSettings, build_settings
from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_settings,
    write_placeholder_settings,
)
from .loader import ConfigurationError, load_settings

__all__ = [
    "BundlerSettings",
    "build_settings",
    "ConfigurationError",
    "load_settings",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_settings",
    "write_placeholder_settings",
]
