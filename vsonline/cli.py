"""Typer application and entry point for the CLI.

Commands:
    fetch  Fetch a work item and print the normalized record
    url    Print the edit URL of a work item
    config Show the effective configuration
"""

import json
import logging
from typing import Annotated

import httpx
import typer
from rich.table import Table

from vsonline.config import ConfigManager, ConfigValidationError
from vsonline.integrations import (
    AuthenticationManager,
    BasicAuth,
    Credentials,
    InvalidTrackerHostError,
    IssueFetcher,
    IssueRecord,
    TokenAuth,
    create_cache,
    derive_edit_url,
)
from vsonline.utils.console import console, print_error, print_warning, show_version
from vsonline.utils.errors import ExitCode, TrackerNotConfiguredError, VsOnlineError
from vsonline.utils.logging import setup_logging

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="vsonline",
    help="Fetch work items from Visual Studio Online issue trackers",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        show_version()
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """VSONLINE - Visual Studio Online work item lookup."""
    setup_logging()


def _load_config() -> ConfigManager:
    config = ConfigManager()
    try:
        config.load()
    except ConfigValidationError as e:
        print_error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR) from e
    return config


def _resolve_host(host: str | None, config: ConfigManager) -> str:
    resolved = host or config.settings.tracker_host
    if not resolved:
        raise TrackerNotConfiguredError(
            "No tracker host given. Pass --host or set TRACKER_HOST "
            "(e.g. https://account.visualstudio.com/DefaultCollection/Project/)"
        )
    return resolved


def _resolve_credentials(
    config: ConfigManager,
    user: str | None,
    password: str | None,
    token: str | None,
) -> Credentials:
    if token:
        return TokenAuth(token)
    if user:
        return BasicAuth(user, password or "")
    if password:
        print_warning("--password is ignored without --user")
    return AuthenticationManager(config).get_credentials()


def _print_record(record: IssueRecord) -> None:
    table = Table(title=f"Work item {record.id}", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Summary", record.summary or "(none)")
    table.add_row("State", record.state or "(none)")
    table.add_row("Type", record.type or "(none)")
    table.add_row("Feature request", "yes" if record.feature_request else "no")
    table.add_row("Resolved", "yes" if record.resolved else "no")
    table.add_row("Link", record.url or "(none)")
    console.print(table)


@app.command()
def fetch(
    issue_id: Annotated[str, typer.Argument(help="Work item ID, e.g. 42")],
    host: Annotated[
        str | None,
        typer.Option(
            "--host",
            "-H",
            help="Tracker host, scheme://host/collection/project/ (default: TRACKER_HOST)",
        ),
    ] = None,
    user: Annotated[
        str | None,
        typer.Option("--user", "-u", help="User name for basic authentication"),
    ] = None,
    password: Annotated[
        str | None,
        typer.Option("--password", "-p", help="Password for basic authentication"),
    ] = None,
    token: Annotated[
        str | None,
        typer.Option("--token", "-t", help="Personal access token"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the record as JSON"),
    ] = False,
) -> None:
    """Fetch a work item and print the normalized record."""
    config = _load_config()
    settings = config.settings

    try:
        cache = create_cache(settings)
    except OSError as e:
        print_error(f"Cannot use cache directory {settings.get_cache_dir()}: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR) from e

    try:
        tracker_host = _resolve_host(host, config)
        credentials = _resolve_credentials(config, user, password, token)
        with IssueFetcher(
            cache=cache,
            timeout_seconds=settings.get_timeout(),
        ) as fetcher:
            record = fetcher.fetch_issue(tracker_host, issue_id, credentials)
    except VsOnlineError as e:
        print_error(str(e))
        raise typer.Exit(e.exit_code) from e
    except InvalidTrackerHostError as e:
        print_error(str(e))
        raise typer.Exit(ExitCode.INVALID_TRACKER_HOST) from e
    except httpx.HTTPError as e:
        print_error(f"Failed to fetch work item {issue_id}: {e}")
        raise typer.Exit(ExitCode.FETCH_FAILED) from e
    except ValueError as e:
        # json.JSONDecodeError and InvalidWorkItemResponseError
        print_error(f"Invalid response for work item {issue_id}: {e}")
        raise typer.Exit(ExitCode.INVALID_RESPONSE) from e

    logger.info(f"Fetched work item {record.id}")
    if as_json:
        console.print_json(json.dumps(record.to_dict()))
    else:
        _print_record(record)


@app.command()
def url(
    issue_id: Annotated[str, typer.Argument(help="Work item ID, e.g. 42")],
    host: Annotated[
        str | None,
        typer.Option("--host", "-H", help="Tracker host (default: TRACKER_HOST)"),
    ] = None,
) -> None:
    """Print the edit URL of a work item without contacting the tracker."""
    config = _load_config()
    try:
        tracker_host = _resolve_host(host, config)
    except VsOnlineError as e:
        print_error(str(e))
        raise typer.Exit(e.exit_code) from e
    console.print(derive_edit_url(tracker_host, issue_id), soft_wrap=True, highlight=False)


@app.command("config")
def show_config() -> None:
    """Show the effective configuration (secrets masked)."""
    config = _load_config()
    config.show()


__all__ = ["app"]
