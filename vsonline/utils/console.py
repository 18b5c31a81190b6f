"""Rich-based console output utilities.

Messages shown to the user are also written to the log at the matching level.
"""

import logging

from rich.console import Console
from rich.theme import Theme

from vsonline import __version__

custom_theme = Theme(
    {
        "error": "bold red",
        "warning": "bold yellow",
        "info": "bold blue",
        "header": "bold magenta",
    }
)

# Global console instances
console = Console(theme=custom_theme)
console_err = Console(theme=custom_theme, stderr=True)

logger = logging.getLogger(__name__)


def print_error(message: str) -> None:
    """Print error message in red."""
    console_err.print(f"[error][[ERROR]][/error] [red]{message}[/red]")
    logger.error(message)


def print_warning(message: str) -> None:
    """Print warning message in yellow."""
    console_err.print(f"[warning][[WARNING]][/warning] [yellow]{message}[/yellow]")
    logger.warning(message)


def print_info(message: str) -> None:
    """Print info message in blue/cyan."""
    console.print(f"[info][[INFO]][/info] [cyan]{message}[/cyan]")
    logger.info(message)


def print_header(title: str) -> None:
    """Print section header in magenta."""
    console.print()
    console.print(f"[header]=== {title} ===[/header]")
    console.print()


def show_version() -> None:
    """Display version information."""
    console.print(f"vsonline [bold]{__version__}[/bold]")


__all__ = [
    "console",
    "console_err",
    "print_error",
    "print_warning",
    "print_info",
    "print_header",
    "show_version",
]
