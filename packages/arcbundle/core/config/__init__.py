"""Configuration management for arcbundle."""

from arcbundle.core.config.loader import (
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
)
from arcbundle.core.config.models import AppConfig, BundleConfig, ConfigBase, LoggingConfig

__all__ = [
    # Loaders
    "detect_format",
    "load_config",
    "load_app_config",
    "configure_logging",
    # Models
    "ConfigBase",
    "AppConfig",
    "BundleConfig",
    "LoggingConfig",
]
