"""Configuration management for pogodoro."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir
from pydantic import BaseModel, Field, ValidationError

from pogodoro.adapters.sqlite.connection import default_db_path
from pogodoro.models.exceptions import InvalidInputError
from pogodoro.models.focus.controller import SessionConfig
from pogodoro.models.focus.cycling import DEFAULT_LONG_BREAK_INTERVAL, SkipPolicy

logger = logging.getLogger(__name__)

APP_NAME = "pogodoro"


class TimerConfig(BaseModel):
    """Timer configuration. Durations are minutes, as typed on the command line."""

    long_break_interval: int = Field(default=DEFAULT_LONG_BREAK_INTERVAL, ge=1)
    work_minutes: float = Field(default=25, gt=0)
    short_break_minutes: float = Field(default=5, gt=0)
    long_break_minutes: float = Field(default=15, gt=0)
    skip_policy: SkipPolicy = Field(default=SkipPolicy.NEVER)
    tick_seconds: float = Field(default=0.25, gt=0)

    def session_config(self) -> SessionConfig:
        return SessionConfig(
            long_break_interval=self.long_break_interval,
            skip_policy=self.skip_policy,
        )


class NotificationConfig(BaseModel):
    """Desktop notification configuration."""

    enabled: bool = Field(default=True)
    bell: bool = Field(default=True)


class StorageConfig(BaseModel):
    """Task database location."""

    db_path: Optional[str] = Field(default=None)


class Config(BaseModel):
    """Main configuration."""

    timer: TimerConfig = Field(default_factory=TimerConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)


class ConfigManager:
    """Loads, edits and persists the JSON config file."""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else Path(user_config_dir(APP_NAME))
        self.config_file = self.config_dir / "config.json"
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def db_path(self) -> Path:
        """Configured database path, or the default under user_data_dir."""
        if self.config.storage.db_path:
            return Path(self.config.storage.db_path).expanduser()
        return default_db_path()

    def load_config(self) -> Config:
        """Load configuration from file, falling back to defaults if it is unreadable."""
        if not self.config_file.exists():
            return Config()
        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
            return Config(**data)
        except (OSError, json.JSONDecodeError, TypeError, ValidationError) as e:
            logger.warning("ignoring unreadable config %s: %s", self.config_file, e)
            return Config()

    def save_config(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.config

        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(config.model_dump(mode="json"), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self._lookup(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            InvalidInputError: If the key does not exist or the value fails validation
        """
        self._lookup(self.config, key)
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            current = current[k]
        current[keys[-1]] = value

        try:
            new_config = Config(**config_dict)
        except ValidationError as e:
            raise InvalidInputError(f"Invalid value for {key}: {value!r}") from e

        self._config = new_config
        self.save_config()
        logger.info("config %s set to %r", key, self.get(key))

    def reset(self, key: Optional[str] = None) -> None:
        """Reset one key, or the whole configuration, to defaults."""
        if key is None:
            self._config = Config()
            self.save_config()
        else:
            self.set(key, self._lookup(Config(), key))

    def as_dict(self) -> dict[str, Any]:
        """Flattened ``section.key -> value`` view for display."""
        flat = {}
        for section, values in self.config.model_dump(mode="json").items():
            for name, value in values.items():
                flat[f"{section}.{name}"] = value
        return flat

    @staticmethod
    def _lookup(config: Config, key: str) -> Any:
        value: Any = config
        for k in key.split("."):
            if not isinstance(value, BaseModel) or k not in type(value).model_fields:
                raise InvalidInputError(f"Unknown config key: {key}")
            value = getattr(value, k)
        if isinstance(value, BaseModel):
            raise InvalidInputError(f"Config key {key} is a section, not a value")
        return value


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def reset_config_manager() -> None:
    """Drop the cached manager so the next call re-reads the file."""
    global _config_manager
    _config_manager = None
