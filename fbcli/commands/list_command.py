import json

from rich.console import Console
from rich.table import Table

from ..utils.connection import connect

console = Console()


def _print_table(title: str, columns, rows):
    if not rows:
        console.print(f"No {title.lower()} found.")
        return
    table = Table(title=title, show_header=True, header_style="bold")
    for name, style in columns:
        table.add_column(name, style=style)
    for row in rows:
        table.add_row(*[str(cell) for cell in row])
    console.print(table)


def handle_areas(args):
    """
    Lists the areas of a project.
    """
    with connect() as client:
        areas = client.get_all_areas(args.project_id)
    if getattr(args, 'json', False):
        print(json.dumps(areas, indent=2))
    else:
        _print_table("Areas", [("ID", "cyan"), ("Area", "green")], sorted(areas.items()))
    return areas


def handle_categories(args):
    with connect() as client:
        categories = client.get_all_categories()
    if getattr(args, 'json', False):
        print(json.dumps(categories, indent=2))
    else:
        _print_table("Categories", [("ID", "cyan"), ("Category", "green")], sorted(categories.items()))
    return categories


def handle_filters(args):
    with connect() as client:
        filters = client.get_all_filters()
    if getattr(args, 'json', False):
        print(json.dumps([f.to_dict() for f in filters], indent=2))
    else:
        rows = [(f.s_filter, f.name, f.filter_type, "*" if f.is_current else "") for f in filters]
        _print_table("Filters", [("ID", "cyan"), ("Filter", "green"), ("Type", "yellow"), ("Current", "magenta")], rows)
    return filters


def handle_people(args):
    """
    Lists FogBugz users. Normal users are included by default; virtual and
    community users on request.
    """
    with connect() as client:
        people = client.get_all_fogbugz_users(
            include_normal=getattr(args, 'normal', True),
            include_virtual=getattr(args, 'virtual', False),
            include_community=getattr(args, 'community', False),
        )
    if getattr(args, 'json', False):
        print(json.dumps({ix: p.to_dict() for ix, p in people.items()}, indent=2))
    else:
        rows = [(ix, p.full_name, p.email) for ix, p in sorted(people.items())]
        _print_table("People", [("ID", "cyan"), ("Name", "green"), ("Email", "yellow")], rows)
    return people


def handle_priorities(args):
    with connect() as client:
        priorities = client.get_all_priorities()
    if getattr(args, 'json', False):
        print(json.dumps({ix: p.to_dict() for ix, p in priorities.items()}, indent=2))
    else:
        rows = [(ix, p.name, "*" if p.is_default else "") for ix, p in sorted(priorities.items())]
        _print_table("Priorities", [("ID", "cyan"), ("Priority", "green"), ("Default", "magenta")], rows)
    return priorities


def handle_projects(args):
    with connect() as client:
        projects = client.get_project_list()
    if getattr(args, 'json', False):
        print(json.dumps({ix: p.to_dict() for ix, p in projects.items()}, indent=2))
    else:
        rows = [(ix, p.name, p.ix_person_owner if p.ix_person_owner is not None else "-") for ix, p in sorted(projects.items())]
        _print_table("Projects", [("ID", "cyan"), ("Project", "green"), ("Owner", "yellow")], rows)
    return projects
