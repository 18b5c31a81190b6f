"""Logging configuration for VSONLINE.

Modules log through logging.getLogger(__name__); everything under the
"vsonline" namespace ends up in one file when logging is enabled, and
nowhere otherwise.

Environment Variables:
    VSONLINE_LOG: Set to "true" to enable logging (default: "false")
    VSONLINE_LOG_FILE: Path to log file (default: ~/.vsonline.log)
"""

import logging
import os
from pathlib import Path

ROOT_LOGGER_NAME = "vsonline"

LOG_ENABLED = os.environ.get("VSONLINE_LOG", "false").lower() == "true"
LOG_FILE = Path(os.environ.get("VSONLINE_LOG_FILE", str(Path.home() / ".vsonline.log")))

_logger: logging.Logger | None = None


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path)
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    return handler


def setup_logging() -> logging.Logger:
    """Attach the package handler to the "vsonline" logger once.

    With VSONLINE_LOG=true, records from every vsonline module at DEBUG
    and above go to LOG_FILE. Otherwise a NullHandler keeps the package
    silent.

    Returns:
        The package root logger
    """
    global _logger

    if _logger is not None:
        return _logger

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if LOG_ENABLED:
        logger.addHandler(_file_handler(LOG_FILE))
        logger.setLevel(logging.DEBUG)
    else:
        logger.addHandler(logging.NullHandler())

    _logger = logger
    return logger


__all__ = [
    "LOG_ENABLED",
    "LOG_FILE",
    "ROOT_LOGGER_NAME",
    "setup_logging",
]
