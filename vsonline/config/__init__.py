"""Configuration management for VSONLINE.

This package contains:
- settings: Settings dataclass with configuration fields and validation
- manager: ConfigManager class for loading configuration

Configuration Format
====================
Flat KEY=VALUE lines (environment variable style), for example:

    TRACKER_HOST=https://account.visualstudio.com/DefaultCollection/Project/
    TRACKER_TOKEN="my-personal-access-token"
    CACHE_TYPE=file
    CACHE_TTL_MINUTES=60
"""

from vsonline.config.manager import SENSITIVE_KEY_PATTERNS, ConfigManager, is_sensitive_key
from vsonline.config.settings import CACHE_TYPES, CONFIG_FILE, ConfigValidationError, Settings

__all__ = [
    "Settings",
    "ConfigManager",
    "ConfigValidationError",
    "CACHE_TYPES",
    "CONFIG_FILE",
    "SENSITIVE_KEY_PATTERNS",
    "is_sensitive_key",
]
