"""Configuration management for fsentry."""

import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATHS = [
    Path("fsentry.yaml"),
    Path("fsentry.yml"),
    Path.home() / ".config" / "fsentry" / "config.yaml",
    Path.home() / ".config" / "fsentry" / "config.yml",
]


def _load_yaml_config(config_file: str | Path | None = None) -> dict[str, Any]:
    """Load YAML config file if it exists.

    Args:
        config_file: Explicit config file. Must exist when given

    Raises:
        FileNotFoundError: If config_file is given but missing
    """
    if config_file is not None:
        path = Path(config_file).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        config_paths = [path]
    else:
        config_paths = DEFAULT_CONFIG_PATHS

    for path in config_paths:
        if path.exists():
            logger.debug(f"Loading config from {path}")
            with open(path) as f:
                return yaml.safe_load(f) or {}

    return {}


class Settings(BaseSettings):
    """Settings loaded from YAML + environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FSENTRY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_encoding: str = "utf-8"
    read_chunk_size: int = Field(default=64 * 1024, gt=0)
    output_format: Literal["table", "json"] = "table"
    log_level: str = "WARNING"
    server_root: Path = Path(".")

    # Only used to pick the YAML file, never read back
    config_file: Path | None = Field(default=None, exclude=True)

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @model_validator(mode="before")
    @classmethod
    def load_yaml_config(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Load YAML config and merge with env vars.

        Priority: Environment Variables > YAML Config > Defaults
        """
        yaml_config = _load_yaml_config(values.get("config_file"))

        # Merge YAML config into values only if not already set (env vars take precedence)
        for key, val in yaml_config.items():
            if val is not None and key not in values:
                values[key] = val

        return values

    @model_validator(mode="after")
    def expand_paths(self) -> "Settings":
        """Expand ~ in paths to the user's home directory."""
        self.server_root = Path(self.server_root).expanduser()
        return self


_settings: Settings | None = None


def get_settings(config_file: str | Path | None = None) -> Settings:
    """Get the current settings instance.

    Args:
        config_file: Load settings from this YAML file instead of the
            default locations. Always reloads when given
    """
    global _settings
    if config_file is not None:
        _settings = Settings(config_file=config_file)
    elif _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings (useful after environment changes)."""
    global _settings
    _settings = Settings()
    return _settings
