import json
from typing import Dict, List, Optional

from rich.console import Console
from rich.table import Table

from ..fogbugz_api import InvalidArgumentError
from ..utils.connection import connect

console = Console()


def parse_options(pairs: Optional[List[str]]) -> Dict[str, str]:
    """
    Turn repeated ``--option name=value`` strings into a dict.
    Names may be friendly (priority, owner, ...) or raw API fields.
    """
    options: Dict[str, str] = {}
    for pair in pairs or []:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise InvalidArgumentError(f"Option '{pair}' must look like name=value")
        options[name.strip()] = value
    return options


def handle_open(args):
    """
    Opens a new FogBugz case with the provided title, description and options.
    """
    options = parse_options(getattr(args, 'options', None))
    with connect() as client:
        case_id = client.open_ticket(args.title, args.description, options)
    console.print(f"Case [bold cyan]{case_id}[/bold cyan] opened: {args.title}")
    return case_id


def handle_update(args):
    options = parse_options(getattr(args, 'options', None))
    with connect() as client:
        case_id = client.update_ticket(args.case_id, args.content, options)
    console.print(f"Case [bold cyan]{case_id}[/bold cyan] updated.")
    return case_id


def handle_reopen(args):
    options = parse_options(getattr(args, 'options', None))
    with connect() as client:
        case_id = client.reopen_ticket(args.case_id, options)
    console.print(f"Case [bold cyan]{case_id}[/bold cyan] reopened.")
    return case_id


def handle_resolve(args):
    options = parse_options(getattr(args, 'options', None))
    with connect() as client:
        case_id = client.resolve_ticket(args.case_id, options)
    console.print(f"Case [bold cyan]{case_id}[/bold cyan] resolved.")
    return case_id


def handle_close(args):
    with connect() as client:
        case_id = client.close_ticket(args.case_id)
    console.print(f"Case [bold cyan]{case_id}[/bold cyan] closed.")
    return case_id


def handle_show(args):
    """
    Shows a case: open state, status, assignee and its latest event.
    """
    with connect() as client:
        case = client.get_ticket(args.case_id)

    if getattr(args, 'json', False):
        print(json.dumps(case.to_dict(), indent=2))
        return case

    state = "open" if case.is_open else "closed"
    console.print(f"[bold]Case {case.ix_bug}[/bold] ({state})")
    console.print(f"Status: {case.ix_status if case.ix_status is not None else '-'}")
    console.print(f"Assigned to: {case.person_assigned_to or '-'}")

    if case.events:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Event", style="cyan")
        table.add_column("Date", style="yellow")
        table.add_column("Who", style="green")
        table.add_column("Description")
        for event in case.events:
            table.add_row(str(event.ix_bug_event), event.date or "-", event.person, event.description)
        console.print(table)
    return case


def handle_status(args):
    with connect() as client:
        status = client.get_ticket_status(args.status_id)

    if getattr(args, 'json', False):
        print(json.dumps(status.to_dict(), indent=2))
    else:
        flags = [name for name, on in (("resolved", status.is_resolved), ("duplicate", status.is_duplicate), ("deleted", status.is_deleted)) if on]
        console.print(f"Status {status.ix_status}: [bold]{status.name}[/bold] {'(' + ', '.join(flags) + ')' if flags else ''}")
    return status
