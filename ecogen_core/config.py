"""Configuration management for ecogen."""
import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError
from .render import OutputFormat
from .schemas import Layout
from .utils import validate_memory

logger = logging.getLogger(__name__)


class EcogenConfig(BaseModel):
    """Global ecogen configuration."""

    log_level: str = Field(default="INFO", description="Logging level")
    default_layout: Layout = Field(default=Layout.DEVELOPMENT, description="Layout used when none is given")
    standard_root: str = Field(default="/opt/api0", description="Root of the standard host layout")
    shared_root: str = Field(default="/opt/app", description="Root of the shared app directory layout")
    max_memory_restart: str = Field(default="500M", description="Memory ceiling before restart")
    node_env: str = Field(default="production", description="NODE_ENV exported to every process")
    output_format: OutputFormat = Field(default=OutputFormat.JSON, description="Ecosystem format: json or js")

    @field_validator("default_layout", mode="before")
    @classmethod
    def _normalize_layout(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("standard_root", "shared_root")
    @classmethod
    def _absolute_root(cls, value: str) -> str:
        if not value.strip().startswith("/"):
            raise ValueError("host layout roots must be absolute paths")
        return value.strip()

    @field_validator("max_memory_restart")
    @classmethod
    def _check_memory(cls, value: str) -> str:
        try:
            return validate_memory(value)
        except ValidationError as e:
            raise ValueError(e.message)


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
            self.config_path = Path.home() / ".ecogen" / "config.json"

        self._config: Optional[EcogenConfig] = None

    @property
    def config(self) -> EcogenConfig:
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
                self._config = EcogenConfig(**data)
                logger.debug(f"Configuration loaded from {self.config_path}")
            except json.JSONDecodeError as e:
                logger.warning(f"Invalid config file, using defaults: {e}")
                self._config = EcogenConfig()
            except (PydanticValidationError, TypeError) as e:
                logger.error(f"Error loading config: {e}")
                self._config = EcogenConfig()
        else:
            logger.debug("No config file found, using defaults")
            self._config = EcogenConfig()

    def save(self) -> None:
        """Save config to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            f.write(self.config.model_dump_json(indent=2))
        logger.debug(f"Configuration saved to {self.config_path}")

    def get(self) -> EcogenConfig:
        """Get the current configuration."""
        return self.config

    def update(self, **kwargs) -> None:
        """Update configuration values.

        Args:
            **kwargs: Configuration values to update.

        Raises:
            ValidationError: If a key is not a known setting or a value is
                rejected. The current configuration is left unchanged.
        """
        current = self.config.model_dump(mode="json")
        for key in kwargs:
            if key not in current:
                raise ValidationError(key, "unknown configuration key")
        current.update(kwargs)
        try:
            self._config = EcogenConfig(**current)
        except PydanticValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or "config"
            raise ValidationError(field, error["msg"])

    def reset(self) -> None:
        """Reset configuration to defaults."""
        self._config = EcogenConfig()


# Lazy singleton pattern
_config_instance: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the global config manager instance (lazy initialization)."""
    global _config_instance
    if _config_instance is None:
        _config_instance = ConfigManager()
    return _config_instance


def get_config() -> EcogenConfig:
    """Get the current configuration."""
    return get_config_manager().config


def reset_config() -> None:
    """Reset the global config instance. Useful for testing."""
    global _config_instance
    _config_instance = None
