"""Utility modules for VSONLINE.

This package contains:
- console: Rich-based terminal output utilities
- errors: Custom exceptions and exit codes
- logging: Logging configuration
"""

from vsonline.utils.console import (
    console,
    print_error,
    print_header,
    print_info,
    print_warning,
    show_version,
)
from vsonline.utils.errors import ExitCode, TrackerNotConfiguredError, VsOnlineError
from vsonline.utils.logging import setup_logging

__all__ = [
    # Console
    "console",
    "print_error",
    "print_header",
    "print_info",
    "print_warning",
    "show_version",
    # Errors
    "ExitCode",
    "VsOnlineError",
    "TrackerNotConfiguredError",
    # Logging
    "setup_logging",
]
