"""Configuration exports."""

from hatchpack.config.loader import DEFAULT_CONFIG_PATH, load_app_config
from hatchpack.config.models import AppConfig, LoggingConfig, PackagingConfig

__all__ = [
    "AppConfig",
    "DEFAULT_CONFIG_PATH",
    "LoggingConfig",
    "PackagingConfig",
    "load_app_config",
]
