"""Configuration models for arcbundle."""

from __future__ import annotations

from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, Field


class ConfigBase(BaseModel):
    """Base class for all arcbundle configurations.

    Provides common functionality for loading from files with defaults.
    Subclasses must implement default_path() to specify their default location.
    """

    model_config = ConfigDict(extra="ignore")  # Forward compatibility

    @classmethod
    def default_path(cls) -> Path:
        """Return the default config file path for this config type.

        Subclasses must override this to provide their default location.

        Returns:
            Path to the default config file
        """
        raise NotImplementedError(f"{cls.__name__} must implement default_path()")

    @classmethod
    def load_or_default(cls, path: Path | str | None = None) -> Self:
        """Load config from path, or from default_path() when None.

        A missing file yields a config built entirely from defaults.

        Raises:
            ValueError: If the file format is unsupported or content is invalid
            ValidationError: If config is invalid
        """
        from arcbundle.core.config.loader import load_config

        if path is None:
            path = cls.default_path()
        if not Path(path).exists():
            return cls()
        return cls.model_validate(load_config(path))


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit JSON lines instead of text")
    filename: str | None = Field(default=None, description="Log file (stdout when unset)")


class BundleConfig(BaseModel):
    """Packaging behavior."""

    default_version: str = Field(
        default="1.0.0",
        min_length=1,
        description="Version written when the caller supplies none",
    )
    meta_filename: str = Field(default="meta.cb", min_length=1)
    excluded_suffixes: list[str] = Field(
        default_factory=lambda: [".oldjson"],
        description="File name suffixes left out of the bundle (case-insensitive)",
    )
    sort_paths: bool = Field(
        default=True,
        description="Sort directory listings so repeated builds produce identical manifests",
    )


class AppConfig(ConfigBase):
    """Application-level configuration."""

    model_config = ConfigDict(extra="ignore")
    logging: LoggingConfig = LoggingConfig()
    bundle: BundleConfig = BundleConfig()

    @classmethod
    def default_path(cls) -> Path:
        """Default path for application config."""
        return Path("config.json")
