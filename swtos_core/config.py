"""Configuration management for SWT-OS."""
import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class SwtOsConfig(BaseModel):
    """Global SWT-OS Configuration."""

    log_level: str = Field(default="INFO", description="Logging level")
    probe_command: List[str] = Field(
        default_factory=lambda: ["uname", "-a"],
        description="Command whose output identifies macOS hardware",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value

    @field_validator("probe_command")
    @classmethod
    def _check_probe_command(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("probe_command cannot be empty")
        return value


class ConfigManager:
    """Manages loading and saving of configuration."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize the config manager.

        Args:
            config_path: Path to the config file. If None, uses default location.
        """
        if config_path:
            self.config_path = config_path
        else:
            self.config_path = Path.home() / ".swtos" / "config.json"

        self._config: Optional[SwtOsConfig] = None

    @property
    def config(self) -> SwtOsConfig:
        """Get the current configuration (lazy loading)."""
        if self._config is None:
            self._load()
        return self._config  # type: ignore

    def _load(self) -> None:
        """Load config from file."""
        if self.config_path.exists():
            try:
                with open(self.config_path, "r") as f:
                    data = json.load(f)
                    self._config = SwtOsConfig(**data)
                    logger.debug(f"Configuration loaded from {self.config_path}")
            except json.JSONDecodeError as e:
                logger.warning(f"Invalid config file, using defaults: {e}")
                self._config = SwtOsConfig()
            except Exception as e:
                logger.error(f"Error loading config: {e}")
                self._config = SwtOsConfig()
        else:
            logger.debug("No config file found, using defaults")
            self._config = SwtOsConfig()

    def save(self) -> None:
        """Save config to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            f.write(self.config.model_dump_json(indent=2))
        logger.debug(f"Configuration saved to {self.config_path}")

    def update(self, **kwargs) -> None:
        """Update configuration values.

        Args:
            **kwargs: Configuration values to update.

        Raises:
            ConfigError: If a value fails validation.
        """
        current = self.config.model_dump()
        current.update(kwargs)
        try:
            self._config = SwtOsConfig(**current)
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or "config"
            raise ConfigError(field, error["msg"]) from e

    def reset(self) -> None:
        """Reset configuration to defaults."""
        self._config = SwtOsConfig()


# Lazy singleton pattern
_config_instance: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the global config manager instance (lazy initialization)."""
    global _config_instance
    if _config_instance is None:
        _config_instance = ConfigManager()
    return _config_instance


def get_config() -> SwtOsConfig:
    """Get the current configuration."""
    return get_config_manager().config


def reset_config() -> None:
    """Reset the global config instance. Useful for testing."""
    global _config_instance
    _config_instance = None
