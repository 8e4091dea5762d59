#!/usr/bin/env python3
import logging
import sys
from types import SimpleNamespace
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__
from .fogbugz_api import FogBugzError
from .utils.config import ConfigError, load_env_vars
from .utils.logger import get_logger, set_level

# Load environment variables
load_env_vars()

log = get_logger(__name__)
err_console = Console(stderr=True)

# Create app instance
app = typer.Typer(
    name="fbcli",
    help="FogBugz CLI - Open, update and search FogBugz cases from the command line.",
    no_args_is_help=True,
)

from .commands.session_command import handle_login, handle_logout, handle_server_status
from .commands.ticket_command import (
    handle_close,
    handle_open,
    handle_reopen,
    handle_resolve,
    handle_show,
    handle_status,
    handle_update,
)
from .commands.list_command import (
    handle_areas,
    handle_categories,
    handle_filters,
    handle_people,
    handle_priorities,
    handle_projects,
)
from .commands.search_command import handle_search, handle_set_filter

OPTION_HELP = "Extra field as name=value (area, category, owner, priority, project or a raw API field). Repeatable."


def _run(handler, **kwargs):
    """Call a command handler, turning client and config errors into a clean exit."""
    try:
        return handler(SimpleNamespace(**kwargs))
    except (FogBugzError, ConfigError) as e:
        log.debug("Command failed", exc_info=True)
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)


def _version_callback(value: bool):
    if value:
        print(f"fbcli {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log API requests."),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit."
    ),
):
    """FogBugz CLI - Open, update and search FogBugz cases from the command line."""
    if verbose:
        set_level(logging.DEBUG)


@app.command("login")
def login(
    email: Optional[str] = typer.Option(None, "--email", "-e", help="FogBugz account email (defaults to FOGBUGZ_EMAIL)."),
    password: Optional[str] = typer.Option(None, "--password", "-p", help="Password (defaults to FOGBUGZ_PASSWORD)."),
    save: bool = typer.Option(True, "--save/--no-save", help="Store the token in ~/.fbcli.env."),
):
    """Log on to FogBugz and keep the session token."""
    _run(handle_login, email=email, password=password, save=save)


@app.command("logout")
def logout():
    """Log off and forget the stored token."""
    _run(handle_logout)


@app.command("server-status")
def server_status():
    """Check whether the FogBugz server answers at all."""
    reachable = _run(handle_server_status)
    if not reachable:
        raise typer.Exit(code=1)


@app.command("open")
def open_case(
    title: str = typer.Option(..., "--title", "-t", help="Title of the new case."),
    description: str = typer.Option(..., "--description", "-d", help="Text of the first event."),
    options: Optional[List[str]] = typer.Option(None, "--option", "-o", help=OPTION_HELP),
):
    """Open a new case."""
    _run(handle_open, title=title, description=description, options=options)


@app.command("update")
def update_case(
    case_id: int = typer.Argument(..., help="Case number."),
    content: str = typer.Option(..., "--content", "-c", help="Text of the new event."),
    options: Optional[List[str]] = typer.Option(None, "--option", "-o", help=OPTION_HELP),
):
    """Add an event to a case."""
    _run(handle_update, case_id=case_id, content=content, options=options)


@app.command("reopen")
def reopen_case(
    case_id: int = typer.Argument(..., help="Case number."),
    options: Optional[List[str]] = typer.Option(None, "--option", "-o", help=OPTION_HELP),
):
    """Reopen a closed case."""
    _run(handle_reopen, case_id=case_id, options=options)


@app.command("resolve")
def resolve_case(
    case_id: int = typer.Argument(..., help="Case number."),
    options: Optional[List[str]] = typer.Option(None, "--option", "-o", help=OPTION_HELP),
):
    """Resolve a case."""
    _run(handle_resolve, case_id=case_id, options=options)


@app.command("close")
def close_case(case_id: int = typer.Argument(..., help="Case number.")):
    """Close a resolved case."""
    _run(handle_close, case_id=case_id)


@app.command("show")
def show_case(
    case_id: int = typer.Argument(..., help="Case number."),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format."),
):
    """Show a case with its latest event."""
    _run(handle_show, case_id=case_id, json=json_output)


@app.command("status")
def show_status(
    status_id: int = typer.Argument(..., help="Status ID (ixStatus)."),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format."),
):
    """Describe a case status."""
    _run(handle_status, status_id=status_id, json=json_output)


@app.command("areas")
def list_areas(
    project_id: int = typer.Argument(..., help="Project ID (ixProject)."),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format."),
):
    """List the areas of a project."""
    _run(handle_areas, project_id=project_id, json=json_output)


@app.command("categories")
def list_categories(json_output: bool = typer.Option(False, "--json", help="Output in JSON format.")):
    """List case categories."""
    _run(handle_categories, json=json_output)


@app.command("filters")
def list_filters(json_output: bool = typer.Option(False, "--json", help="Output in JSON format.")):
    """List the saved filters available to you."""
    _run(handle_filters, json=json_output)


@app.command("people")
def list_people(
    normal: bool = typer.Option(True, "--normal/--no-normal", help="Include normal users."),
    virtual: bool = typer.Option(False, "--virtual", help="Include virtual users."),
    community: bool = typer.Option(False, "--community", help="Include community users."),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format."),
):
    """List FogBugz users."""
    _run(handle_people, normal=normal, virtual=virtual, community=community, json=json_output)


@app.command("priorities")
def list_priorities(json_output: bool = typer.Option(False, "--json", help="Output in JSON format.")):
    """List priorities."""
    _run(handle_priorities, json=json_output)


@app.command("projects")
def list_projects(json_output: bool = typer.Option(False, "--json", help="Output in JSON format.")):
    """List projects."""
    _run(handle_projects, json=json_output)


@app.command("set-filter")
def set_filter(filter_id: int = typer.Argument(..., help="Filter ID to make current.")):
    """Switch the current filter."""
    if not _run(handle_set_filter, filter_id=filter_id):
        raise typer.Exit(code=1)


@app.command("search")
def search(
    query: Optional[str] = typer.Argument(None, help="Search text (omit to list the current filter)."),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format."),
):
    """Search cases."""
    _run(handle_search, query=query, json=json_output)


if __name__ == "__main__":
    sys.exit(app())
