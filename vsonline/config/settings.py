"""Settings dataclass for VSONLINE configuration.

This module defines the Settings dataclass that holds all configuration
values, and the validation applied once they are loaded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path

# Supported cache backends
CACHE_TYPES = frozenset({"memory", "file"})


class ConfigValidationError(Exception):
    """Raised when configuration validation fails.

    This exception is raised for fail-fast behavior when:
    - CACHE_TYPE is not a known cache backend
    - Numeric values are negative
    """

    pass


@dataclass
class Settings:
    """Configuration settings for VSONLINE.

    All settings have defaults and can be loaded from the configuration
    files (~/.vsonline-config, .vsonline) or environment variables.

    Attributes:
        tracker_host: Tracker base URL, "scheme://host/collection/project/"
        tracker_username: User name for basic authentication
        tracker_password: Password for basic authentication
        tracker_token: Personal access token (takes precedence over user/password)
        cache_type: Cache backend, "memory" or "file"
        cache_dir: Directory for the file cache (empty = ~/.vsonline-cache)
        cache_ttl_minutes: Cache entry lifetime in minutes (0 = never expire)
        cache_max_size: Maximum cached records before LRU eviction (0 = unbounded)
        fetch_timeout_seconds: HTTP timeout (0 = HTTP client default)
    """

    # Tracker settings
    tracker_host: str = ""

    # Credential settings
    tracker_username: str = ""
    tracker_password: str = ""
    tracker_token: str = ""

    # Cache settings
    cache_type: str = "memory"
    cache_dir: str = ""
    cache_ttl_minutes: int = 0
    cache_max_size: int = 0

    # Fetch settings
    fetch_timeout_seconds: float = 0.0

    # Config key to attribute mapping
    _key_mapping: dict[str, str] = field(
        default_factory=lambda: {
            "TRACKER_HOST": "tracker_host",
            "TRACKER_USERNAME": "tracker_username",
            "TRACKER_PASSWORD": "tracker_password",
            "TRACKER_TOKEN": "tracker_token",
            "CACHE_TYPE": "cache_type",
            "CACHE_DIR": "cache_dir",
            "CACHE_TTL_MINUTES": "cache_ttl_minutes",
            "CACHE_MAX_SIZE": "cache_max_size",
            "FETCH_TIMEOUT_SECONDS": "fetch_timeout_seconds",
        },
        repr=False,
    )

    def __repr__(self) -> str:
        # Credentials never appear in reprs or logs
        return (
            f"Settings(tracker_host={self.tracker_host!r}, "
            f"cache_type={self.cache_type!r}, "
            f"cache_ttl_minutes={self.cache_ttl_minutes}, "
            f"cache_max_size={self.cache_max_size}, "
            f"fetch_timeout_seconds={self.fetch_timeout_seconds})"
        )

    def get_attribute_for_key(self, key: str) -> str | None:
        """Get the attribute name for a config key."""
        return self._key_mapping.get(key)

    def get_key_for_attribute(self, attr: str) -> str | None:
        """Get the config key for an attribute name."""
        for key, value in self._key_mapping.items():
            if value == attr:
                return key
        return None

    @classmethod
    def get_config_keys(cls) -> list[str]:
        """Get list of all valid configuration keys."""
        temp = cls()
        return list(temp._key_mapping.keys())

    def get_cache_ttl(self) -> timedelta | None:
        """Cache lifetime as a timedelta, or None when entries never expire."""
        if self.cache_ttl_minutes <= 0:
            return None
        return timedelta(minutes=self.cache_ttl_minutes)

    def get_cache_dir(self) -> Path:
        """Directory used by the file cache."""
        if self.cache_dir:
            return Path(self.cache_dir).expanduser()
        return Path.home() / ".vsonline-cache"

    def get_timeout(self) -> float | None:
        """HTTP timeout in seconds, or None to keep the client default."""
        if self.fetch_timeout_seconds <= 0:
            return None
        return self.fetch_timeout_seconds

    def validate(self) -> None:
        """Validate loaded values.

        Raises:
            ConfigValidationError: If any value is out of range
        """
        cache_type = self.cache_type.strip().lower()
        if cache_type not in CACHE_TYPES:
            raise ConfigValidationError(
                f"Invalid CACHE_TYPE '{self.cache_type}'. "
                f"Allowed values: {', '.join(sorted(CACHE_TYPES))}"
            )
        for attr in ("cache_ttl_minutes", "cache_max_size", "fetch_timeout_seconds"):
            if getattr(self, attr) < 0:
                key = self.get_key_for_attribute(attr)
                raise ConfigValidationError(f"{key} must be >= 0, got {getattr(self, attr)}")


# Default configuration file path
CONFIG_FILE = Path.home() / ".vsonline-config"


__all__ = [
    "CACHE_TYPES",
    "CONFIG_FILE",
    "ConfigValidationError",
    "Settings",
]
