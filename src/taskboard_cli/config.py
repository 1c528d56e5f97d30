"""Configuration management for the task board CLI.

Settings are kept per profile as JSON under the platform config directory.
The board file itself lives under the platform data directory unless
``store.path`` (or the ``TASKBOARD_STORE`` environment variable) points
somewhere else.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Literal, Optional

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, Field, ValidationError, field_validator

_APP_DIR = "taskboard-cli"
STORE_ENV_VAR = "TASKBOARD_STORE"


def default_board_path() -> str:
    return str(Path(user_data_dir(_APP_DIR)) / "board.json")


class StoreConfig(BaseModel):
    """Where the board document is kept."""

    path: str = Field(default_factory=default_board_path)

    @field_validator("path")
    @classmethod
    def expand_user(cls, value: str) -> str:
        return os.path.expanduser(value)


class BoardConfig(BaseModel):
    """Board behaviour."""

    show_task_notifications: bool = Field(default=True)
    default_filter: str = Field(default="")


class OutputConfig(BaseModel):
    format: Literal["pretty", "json", "yaml"] = Field(default="pretty")
    color: bool = Field(default=True)


class LogConfig(BaseModel):
    level: str = Field(default="INFO")

    @field_validator("level")
    @classmethod
    def known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level


class Config(BaseModel):
    """Main configuration."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    board: BoardConfig = Field(default_factory=BoardConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    log: LogConfig = Field(default_factory=LogConfig)


def _lookup(config: BaseModel, key: str) -> Any:
    """Resolve a dot-separated key against nested settings models."""
    value: Any = config
    for part in key.split("."):
        if not isinstance(value, BaseModel) or part not in type(value).model_fields:
            return None
        value = getattr(value, part)
    return value


class ConfigManager:
    """Loads, edits and saves the settings of one profile."""

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir(_APP_DIR))
        self.config_file = self.config_dir / f"{profile}.json"
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """The active configuration, with environment overrides applied."""
        if self._config is None:
            self._config = self.load_config()
        override = os.environ.get(STORE_ENV_VAR)
        if override:
            return self._config.model_copy(update={"store": StoreConfig(path=override)})
        return self._config

    def load_config(self) -> Config:
        """Read the profile file; an unreadable or invalid file yields defaults."""
        if not self.config_file.exists():
            return Config()
        try:
            data = json.loads(self.config_file.read_text())
            return Config.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError):
            return Config()

    def save_config(self) -> None:
        """Write the stored settings (not environment overrides) to the profile file."""
        config = self._config if self._config is not None else self.load_config()
        tmp_file = self.config_file.with_suffix(".json.tmp")
        tmp_file.write_text(json.dumps(config.model_dump(), indent=2))
        os.replace(tmp_file, self.config_file)

    def get(self, key: str) -> Any:
        """Get a setting by dot-separated key, or None if there is no such setting."""
        return _lookup(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a setting by dot-separated key and save the profile.

        Raises:
            KeyError: If the key does not name a setting
            ValidationError: If the value does not fit the setting
        """
        if self._config is None:
            self._config = self.load_config()
        stored = self._config
        section, _, name = key.rpartition(".")
        if not section or _lookup(stored, section) is None or _lookup(stored, key) is None:
            raise KeyError(key)

        data = stored.model_dump()
        data[section][name] = value
        self._config = Config.model_validate(data)
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Restore one setting, or every setting, to its default."""
        if key is None:
            self._config = Config()
            self.save_config()
            return
        default_value = _lookup(Config(), key)
        if default_value is None:
            raise KeyError(key)
        self.set(key, default_value)


_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager
