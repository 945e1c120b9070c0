"""Configuration service for timeblock-cli.

ConfigService is the single source of truth for configuration. It handles:

- Loading and saving config.json (created with defaults on first run)
- Dot-separated key access (``schedule.day_start``) for the config commands
- Resetting one key or the whole file to defaults
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir
from pydantic import BaseModel, ValidationError

from timeblock_cli.models.config_models import AppConfig
from timeblock_cli.utils.logger import get_logger


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self):
        self.config_dir = Path(user_config_dir("timeblock_cli"))
        self.config_path = self.config_dir / "config.json"
        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """The loaded configuration (read from disk on first access)."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Read config.json, writing a default file when there is none.

        Raises:
            RuntimeError: If the file exists but is unreadable or invalid
        """
        try:
            raw = self.config_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            config = AppConfig()
            self._write(config)
            get_logger().info("created default config at %s", self.config_path)
            return config
        except OSError as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        try:
            return AppConfig.model_validate_json(raw)
        except ValidationError as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

    def save_config(self) -> None:
        """Write the current configuration to disk (owner read/write only)."""
        self._write(self.config)

    def _write(self, config: AppConfig) -> None:
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            self.config_path.write_text(config.model_dump_json(indent=4), encoding="utf-8")
            self.config_path.chmod(0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not name a known setting
        """
        return _lookup(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key and save.

        Raises:
            KeyError: If the key does not name a known setting
            ValidationError: If the value is invalid for the setting
        """
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                raise KeyError(key)
            current = current[k]
        if keys[-1] not in current:
            raise KeyError(key)
        current[keys[-1]] = value

        self._config = AppConfig.model_validate(config_dict)
        self.save_config()
        get_logger().info("config %s set to %r", key, value)

    def reset(self, key: str | None = None) -> None:
        """Reset one key, or the whole configuration, to defaults."""
        if key is None:
            self._config = AppConfig()
            self.save_config()
        else:
            self.set(key, _lookup(AppConfig(), key))


def _lookup(config: BaseModel, key: str) -> Any:
    value: Any = config
    for k in key.split("."):
        if not isinstance(value, BaseModel) or k not in type(value).model_fields:
            raise KeyError(key)
        value = getattr(value, k)
    return value


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get the process-wide ConfigService."""
    return ConfigService()
