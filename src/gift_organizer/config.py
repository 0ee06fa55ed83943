"""Configuration management for Gift Organizer."""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .data_store import BackendType
from .errors import ConfigError
from .models import GiftStatus


@dataclass
class DataConfig:
    """Data storage configuration."""

    storage_dir: Path
    backend: BackendType = BackendType.JSON


@dataclass
class DefaultsConfig:
    """Default values for new gifts."""

    status: GiftStatus = GiftStatus.PENDING
    store: str = ""


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"


@dataclass
class Config:
    """Complete application configuration."""

    data: DataConfig
    defaults: DefaultsConfig
    logging: LoggingConfig


class ConfigManager:
    """Manages application configuration from TOML files."""

    def __init__(self, config_path: Path | None = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional explicit path to config file.
                        If not provided, searches standard locations.
        """
        self.config_path = config_path or self._find_config()
        self._config = self._load_config()

    @property
    def data(self) -> DataConfig:
        """Get data configuration."""
        return self._config.data

    @property
    def defaults(self) -> DefaultsConfig:
        """Get defaults configuration."""
        return self._config.defaults

    @property
    def logging(self) -> LoggingConfig:
        """Get logging configuration."""
        return self._config.logging

    def _find_config(self) -> Path:
        """Find config file in standard locations."""
        locations = [
            Path.cwd() / "config.toml",
            Path.home() / ".config" / "gift-organizer" / "config.toml",
            Path.home() / ".gift-organizer" / "config.toml",
        ]

        for loc in locations:
            if loc.exists():
                return loc

        return Path.home() / ".config" / "gift-organizer" / "config.toml"

    def _load_config(self) -> Config:
        """Load configuration from TOML file."""
        if not self.config_path.exists():
            return self._default_config()

        try:
            with open(self.config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(self.config_path, str(e)) from e

        data_section = data.get("data", {})
        defaults_section = data.get("defaults", {})

        return Config(
            data=DataConfig(
                storage_dir=Path(
                    data_section.get("storage_dir", "~/gift-organizer/data")
                ).expanduser(),
                backend=self._backend(data_section.get("backend", "json")),
            ),
            defaults=DefaultsConfig(
                status=self._status(defaults_section.get("status", GiftStatus.PENDING.value)),
                store=defaults_section.get("store", ""),
            ),
            logging=LoggingConfig(
                level=str(data.get("logging", {}).get("level", "WARNING")).upper(),
            ),
        )

    def _backend(self, value: Any) -> BackendType:
        """Parse a backend name, ignoring case."""
        for backend in BackendType:
            if str(value).lower() == backend.value:
                return backend
        choices = ", ".join(b.value for b in BackendType)
        raise ConfigError(
            self.config_path, f"data.backend must be one of {choices}, got {value!r}"
        )

    def _status(self, value: Any) -> GiftStatus:
        """Parse a default status, ignoring case."""
        for status in GiftStatus:
            if str(value).lower() == status.value.lower():
                return status
        choices = ", ".join(s.value for s in GiftStatus)
        raise ConfigError(
            self.config_path, f"defaults.status must be one of {choices}, got {value!r}"
        )

    def _default_config(self) -> Config:
        """Return default configuration."""
        return Config(
            data=DataConfig(storage_dir=Path.home() / "gift-organizer" / "data"),
            defaults=DefaultsConfig(),
            logging=LoggingConfig(),
        )

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get config value by dot-notation path.

        Args:
            key_path: Dot-separated path like 'data.storage_dir'
            default: Default value if path not found

        Returns:
            Configuration value or default
        """
        value: Any = self._config

        for key in key_path.split("."):
            if hasattr(value, key):
                value = getattr(value, key)
            else:
                return default

        return value if value is not None else default
