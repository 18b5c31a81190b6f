"""Configuration manager for VSONLINE.

This module provides the ConfigManager class for loading configuration
values with a cascading hierarchy:

    1. Environment Variables (highest priority)
    2. Local Config (.vsonline in project/parent directories)
    3. Global Config (~/.vsonline-config)
    4. Built-in Defaults (lowest priority)
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from vsonline.config.settings import CONFIG_FILE, Settings
from vsonline.utils.console import console, print_header, print_info

logger = logging.getLogger(__name__)

# Config keys whose values are never displayed or logged
SENSITIVE_KEY_PATTERNS = ("PASSWORD", "TOKEN", "SECRET")


def is_sensitive_key(key: str) -> bool:
    """Check whether a config key holds a secret."""
    key_upper = key.upper()
    return any(pattern in key_upper for pattern in SENSITIVE_KEY_PATTERNS)


class ConfigManager:
    """Manages configuration loading with cascading hierarchy.

    Configuration Precedence (highest to lowest):
    1. Environment Variables - CI/CD, temporary overrides
    2. Local Config (.vsonline) - Project-specific settings
    3. Global Config (~/.vsonline-config) - User defaults
    4. Built-in Defaults - Fallback values

    Files are parsed line by line as KEY=VALUE pairs; nothing is evaluated.

    Attributes:
        settings: Current settings instance
        global_config_path: Path to global ~/.vsonline-config file
        local_config_path: Path to discovered local .vsonline file (after load)
    """

    LOCAL_CONFIG_NAME = ".vsonline"

    def __init__(self, global_config_path: Path | None = None) -> None:
        """Initialize the configuration manager.

        Args:
            global_config_path: Optional custom path to global config file.
                                Defaults to ~/.vsonline-config.
        """
        self.global_config_path = global_config_path or CONFIG_FILE
        self.local_config_path: Path | None = None
        self.settings = Settings()
        self._raw_values: dict[str, str] = {}
        self._config_sources: dict[str, str] = {}

    def load(self) -> Settings:
        """Load configuration from all sources with cascading precedence.

        This method is idempotent - each call starts from clean defaults.

        Returns:
            Settings instance with loaded values

        Raises:
            ConfigValidationError: If a loaded value is invalid
        """
        self.settings = Settings()
        self.local_config_path = None
        self._raw_values = {}
        self._config_sources = {}

        if self.global_config_path.exists():
            logger.debug(f"Loading global configuration from {self.global_config_path}")
            self._load_file(self.global_config_path, source="global")

        local_path = self._find_local_config()
        if local_path:
            self.local_config_path = local_path
            logger.debug(f"Loading local configuration from {local_path}")
            self._load_file(local_path, source=f"local ({local_path})")

        self._load_environment()

        for key, value in self._raw_values.items():
            self._apply_value_to_settings(key, value)

        self.settings.validate()
        logger.info(f"Configuration loaded successfully ({len(self._raw_values)} keys)")
        return self.settings

    def _find_local_config(self) -> Path | None:
        """Find local .vsonline config by traversing up from CWD.

        Stops at the first .vsonline file, a .git directory (repository
        root), or the filesystem root.

        Returns:
            Path to local config file, or None if not found
        """
        current = Path.cwd()
        while True:
            config_path = current / self.LOCAL_CONFIG_NAME
            if config_path.exists() and config_path.is_file():
                return config_path

            if (current / ".git").exists():
                break

            parent = current.parent
            if parent == current:
                break
            current = parent

        return None

    def _load_file(self, path: Path, source: str = "file") -> None:
        """Load key=value pairs from a config file.

        Args:
            path: Path to the config file
            source: Source identifier for debugging
        """
        pattern = re.compile(r"^([a-zA-Z_][a-zA-Z0-9_]*)=(.*)$")

        with path.open() as f:
            for line in f:
                line = line.strip()

                if not line or line.startswith("#"):
                    continue

                match = pattern.match(line)
                if match:
                    key, value = match.groups()

                    # Only double-quoted values are unescaped
                    if value.startswith('"') and value.endswith('"'):
                        value = self._unescape_value(value[1:-1])
                    elif value.startswith("'") and value.endswith("'"):
                        value = value[1:-1]

                    self._raw_values[key] = value
                    self._config_sources[key] = source

    @staticmethod
    def _unescape_value(value: str) -> str:
        """Unescape a double-quoted value read from a config file."""
        result = value.replace("\\\\", "\\")
        result = result.replace('\\"', '"')
        return result

    def _load_environment(self) -> None:
        """Override config with environment variables.

        Only known config keys are read from the environment.
        """
        for key in Settings.get_config_keys():
            env_value = os.environ.get(key)
            if env_value is not None:
                self._raw_values[key] = env_value
                self._config_sources[key] = "environment"

    def _apply_value_to_settings(self, key: str, value: str) -> None:
        """Apply a raw config value to the settings object.

        Args:
            key: Configuration key
            value: Raw string value from file or environment
        """
        attr = self.settings.get_attribute_for_key(key)
        if attr is None:
            return

        current_value = getattr(self.settings, attr)

        if isinstance(current_value, bool):
            setattr(self.settings, attr, value.lower() in ("true", "1", "yes"))
        elif isinstance(current_value, int):
            try:
                setattr(self.settings, attr, int(value))
            except ValueError:
                logger.warning(f"Ignoring non-integer value for {key}")
        elif isinstance(current_value, float):
            try:
                setattr(self.settings, attr, float(value))
            except ValueError:
                logger.warning(f"Ignoring non-numeric value for {key}")
        else:
            setattr(self.settings, attr, value)

    def get_source(self, key: str) -> str | None:
        """Get where a configuration value came from (global, local, environment)."""
        return self._config_sources.get(key)

    def show(self) -> None:
        """Display current configuration using Rich formatting.

        Secret values are masked.
        """
        print_header("Current Configuration")

        print_info(f"Global config: {self.global_config_path}")
        if self.local_config_path:
            print_info(f"Local config:  {self.local_config_path}")
        else:
            print_info("Local config:  (not found)")
        console.print()

        for key in Settings.get_config_keys():
            attr = self.settings.get_attribute_for_key(key)
            value = getattr(self.settings, attr) if attr else ""
            if is_sensitive_key(key) and value:
                display = "********"
            else:
                display = str(value) if value not in ("", None) else "(not set)"
            source = self.get_source(key) or "default"
            console.print(f"    {key}: {display} [dim]({source})[/dim]")
        console.print()


__all__ = [
    "ConfigManager",
    "SENSITIVE_KEY_PATTERNS",
    "is_sensitive_key",
]
