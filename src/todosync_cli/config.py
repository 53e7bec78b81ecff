"""Configuration management for todosync."""

import json
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from todosync_cli.utils.logger import get_logger

logger = get_logger(__name__)


class DatabaseConfig(BaseModel):
    """Local database configuration."""

    # None means the platform data directory
    path: Optional[str] = Field(default=None)


class TodoistConfig(BaseModel):
    """Todoist API configuration."""

    base_url: str = Field(default="https://api.todoist.com/rest/v2")
    timeout: float = Field(default=30.0, gt=0)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


class Config(BaseModel):
    """Main configuration."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    todoist: TodoistConfig = Field(default_factory=TodoistConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    current_user_id: Optional[str] = Field(default=None)


class ConfigManager:
    """Manages todosync configuration."""

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir("todosync-cli"))
        self.config_file = self.config_dir / f"{profile}.json"

        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> Config:
        """Load configuration from file."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r") as f:
                    data = json.load(f)
                return Config(**data)
            except (json.JSONDecodeError, PydanticValidationError) as e:
                logger.warning("ignoring corrupted config %s: %s", self.config_file, e)
                return Config()
        return Config()

    def save_config(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.config

        with open(self.config_file, "w") as f:
            json.dump(config.model_dump(), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: If *key* does not name a known setting
            pydantic.ValidationError: If *value* is invalid for the setting
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

        self._config = Config(**config_dict)
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Reset configuration to defaults."""
        if key is None:
            self._config = Config()
        else:
            self.set(key, self.get_from_config(Config(), key))
        self.save_config()

    def get_from_config(self, config: Config, key: str) -> Any:
        """Get value from a config object using dot notation."""
        value: Any = config
        for k in key.split("."):
            if isinstance(value, BaseModel):
                value = getattr(value, k, None)
            else:
                return None
        return value


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: Optional[str] = None) -> ConfigManager:
    """Get or create the global config manager.

    Without *profile*, returns the active manager (the "default" profile
    until another one is requested).
    """
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager(profile or "default")
    elif profile is not None and _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager
