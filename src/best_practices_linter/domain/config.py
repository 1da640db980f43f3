"""Configuration loader for linter settings."""

import logging
import tomllib
from pathlib import Path
from typing import ClassVar, Optional

KNOWN_KEYS: frozenset[str] = frozenset({"checks", "debug"})


class ConfigurationLoader:
    """
    Singleton that loads linter configuration from pyproject.toml.

    Looks for the [tool.best-practices] section in the nearest pyproject.toml
    at or above the current directory.
    """

    _instance: ClassVar[Optional["ConfigurationLoader"]] = None
    _config: ClassVar[dict[str, object]] = {}

    def __new__(cls) -> "ConfigurationLoader":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.load_config()
        return cls._instance

    @classmethod
    def from_dict(cls, config: dict[str, object]) -> "ConfigurationLoader":
        """Build a loader around an explicit config, bypassing pyproject discovery."""
        loader = object.__new__(cls)
        loader.validate_config(config)
        loader.__dict__["_config"] = dict(config)
        return loader

    def load_config(self) -> None:
        """Find and load pyproject.toml configuration."""
        current_path = Path.cwd()
        root_path = Path(current_path.anchor)

        while True:
            config_file = current_path / "pyproject.toml"
            if config_file.exists():
                try:
                    with config_file.open("rb") as f:
                        data = tomllib.load(f)
                except (OSError, tomllib.TOMLDecodeError):
                    logging.warning("Skipping unreadable %s", config_file)
                else:
                    section = data.get("tool", {}).get("best-practices", {})
                    if section:
                        self.validate_config(section)
                        ConfigurationLoader._config = section
                        return
            if current_path == root_path:
                return
            current_path = current_path.parent

    def validate_config(self, config: dict[str, object]) -> None:
        """Warn about unknown keys and mistyped values."""
        for key in sorted(set(config) - KNOWN_KEYS):
            logging.warning("Configuration Warning: unknown key '%s' in [tool.best-practices].", key)
        debug = config.get("debug", False)
        if not isinstance(debug, bool):
            logging.warning("Configuration Warning: 'debug' must be true or false, got %r; ignoring it.", debug)

    @property
    def config(self) -> dict[str, object]:
        """Return the loaded configuration."""
        return self.__dict__.get("_config", ConfigurationLoader._config)

    @property
    def check_refs(self) -> list[str]:
        """Configured ``module:Class`` references, in declaration order."""
        refs = self.config.get("checks", [])
        if not isinstance(refs, list):
            logging.warning("Configuration Warning: 'checks' must be a list of 'module:Class' strings.")
            return []
        return [ref for ref in refs if isinstance(ref, str)]

    @property
    def debug(self) -> bool:
        debug = self.config.get("debug", False)
        return debug if isinstance(debug, bool) else False
