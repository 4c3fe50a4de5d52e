"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from arcbundle.core.config.models import AppConfig, LoggingConfig
from arcbundle.core.utils.logging import configure_logging as _configure_logging

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV_VAR = "ARCBUNDLE_LOG_LEVEL"


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("config.json")
        'json'
        >>> detect_format("config.yml")
        'yaml'
    """
    path = Path(file_path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return raw configuration dictionary.

    Supports both JSON and YAML formats. Format is auto-detected
    from file extension.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    # Check file exists
    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    # Detect format
    fmt = detect_format(path)

    # Load based on format
    if fmt == "json":
        try:
            content = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    else:
        try:
            with path.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        # safe_load returns None for empty files
        if content is None:
            content = {}

    if not isinstance(content, dict):
        raise ValueError(f"Config root must be a mapping: {path}")
    return content


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration.

    A missing file yields all defaults. The log level can be overridden
    through the ``ARCBUNDLE_LOG_LEVEL`` environment variable.

    Args:
        path: Path to app config file (.json, .yaml, or .yml)
              Defaults to config.json

    Returns:
        Validated AppConfig instance with defaults for missing values

    Raises:
        ValidationError: If config or the environment override is invalid
    """
    if path is None:
        path = AppConfig.default_path()
    if not Path(path).exists():
        logger.debug("No config at %s, using defaults", path)

    config = AppConfig.load_or_default(path)

    _load_env_vars_into_config(config)
    return config


def configure_logging(config: AppConfig | None = None) -> None:
    """Configure Python logging from app config.

    Args:
        config: AppConfig instance (loads default if None)
    """
    if config is None:
        config = load_app_config()

    _configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
    )


def _load_env_vars_into_config(config: AppConfig) -> None:
    """Apply environment overrides to config (mutates it).

    Raises:
        ValidationError: If the override is not a known log level
    """
    level = os.getenv(LOG_LEVEL_ENV_VAR)
    if level:
        logger.debug("Loaded %s from environment", LOG_LEVEL_ENV_VAR)
        config.logging = LoggingConfig.model_validate(
            {**config.logging.model_dump(), "level": level.upper()}
        )
