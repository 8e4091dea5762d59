import json

from rich.console import Console
from rich.table import Table

from ..fogbugz_api.transport import error_message, find_error
from ..utils.connection import connect

console = Console()


def handle_search(args):
    """
    Search cases by keyword (or list the current filter when no query is given).
    """
    query = getattr(args, 'query', None) or ""
    with connect() as client:
        cases = client.search(query)

    if getattr(args, 'json', False):
        print(json.dumps([c.to_dict() for c in cases], indent=2))
        return cases

    if not cases:
        console.print("No matching cases found.")
        return cases

    table = Table(show_header=True, header_style="bold")
    table.add_column("Case", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Assigned To", style="yellow")
    table.add_column("Open", style="magenta")

    for case in cases:
        table.add_row(
            str(case.ix_bug),
            case.title,
            case.person_assigned_to or "-",
            "✓" if case.is_open else " ",
        )

    console.print(table)
    console.print(f"\nFound {len(cases)} matching cases")
    return cases


def handle_set_filter(args):
    with connect() as client:
        tree = client.set_filter(args.filter_id)
    error = find_error(tree)
    if error is not None:
        console.print(f"[red]Could not switch filter:[/red] {error_message(error)}")
        return False
    console.print(f"Current filter set to {args.filter_id}.")
    return True
