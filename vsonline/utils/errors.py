"""Custom exceptions and exit codes for VSONLINE.

This module defines the exit codes and the application-level exception
hierarchy. Fetch-specific exceptions live in
vsonline.integrations.exceptions.
"""

from enum import IntEnum
from typing import ClassVar


class ExitCode(IntEnum):
    """Exit codes reported by the CLI.

    These codes are used for consistent error reporting and can be
    checked by calling scripts or CI systems.
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    TRACKER_NOT_CONFIGURED = 2
    INVALID_TRACKER_HOST = 3
    FETCH_FAILED = 4
    INVALID_RESPONSE = 5


class VsOnlineError(Exception):
    """Base exception for VSONLINE errors.

    Each exception type has an associated exit code for proper error reporting.
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.GENERAL_ERROR

    def __init__(self, message: str, exit_code: ExitCode | None = None) -> None:
        """Initialize the exception."""
        super().__init__(message)
        self._exit_code = exit_code

    @property
    def exit_code(self) -> ExitCode:
        """Get the exit code for this exception."""
        if self._exit_code is not None:
            return self._exit_code
        return self.__class__._default_exit_code


class TrackerNotConfiguredError(VsOnlineError):
    """No tracker host was given on the command line or in configuration.

    Raised when:
    - --host is omitted and TRACKER_HOST is not configured
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.TRACKER_NOT_CONFIGURED


__all__ = [
    "ExitCode",
    "VsOnlineError",
    "TrackerNotConfiguredError",
]
