"""
Data models representing FogBugz objects (cases, statuses, people, etc.)
and the decoders that build them from XML responses.
"""

from dataclasses import asdict, dataclass, field
from typing import List, Optional
from xml.etree.ElementTree import Element

from .errors import ApiError, UnexpectedShapeError
from .transport import error_code, error_message, find_error


@dataclass
class CaseEvent:
    ix_bug_event: int
    description: str = ""
    verb: str = ""
    person: str = ""
    date: Optional[str] = None
    text: str = ""

    def to_dict(self):
        return asdict(self)


@dataclass
class Case:
    ix_bug: int
    title: str = ""
    is_open: Optional[bool] = None
    ix_status: Optional[int] = None
    ix_person_assigned_to: Optional[int] = None
    person_assigned_to: str = ""
    events: List[CaseEvent] = field(default_factory=list)

    def to_dict(self):
        return asdict(self)


@dataclass
class Status:
    ix_status: int
    name: str
    ix_category: Optional[int] = None
    is_resolved: bool = False
    is_duplicate: bool = False
    is_deleted: bool = False
    order: Optional[int] = None

    def to_dict(self):
        return asdict(self)


@dataclass
class Filter:
    s_filter: str
    name: str
    filter_type: str = ""
    is_current: bool = False

    def to_dict(self):
        return asdict(self)


@dataclass
class Person:
    ix_person: int
    full_name: str
    email: str = ""

    def to_dict(self):
        return asdict(self)


@dataclass
class Priority:
    ix_priority: int
    name: str
    is_default: bool = False

    def to_dict(self):
        return asdict(self)


@dataclass
class Project:
    ix_project: int
    name: str
    ix_person_owner: Optional[int] = None

    def to_dict(self):
        return asdict(self)


# --- field helpers ---

def _raise_missing(tree: Element, what: str):
    """Turn a missing payload into ApiError when the server said why, else UnexpectedShapeError."""
    error = find_error(tree)
    if error is not None:
        raise ApiError(error_message(error), error_code(error))
    raise UnexpectedShapeError(f"Response does not contain {what}")


def require_node(tree: Element, path: str) -> Element:
    node = tree.find(path)
    if node is None:
        _raise_missing(tree, f"<{path}>")
    return node


def text_field(node: Element, name: str, default: Optional[str] = None) -> Optional[str]:
    """Read ``name`` from an attribute, falling back to a child element."""
    value = node.get(name)
    if value is None:
        child = node.find(name)
        if child is not None:
            value = "".join(child.itertext())
    if value is None:
        return default
    return value.strip()


def int_field(node: Element, name: str, required: bool = False) -> Optional[int]:
    value = text_field(node, name)
    if value is None or value == "":
        if required:
            raise UnexpectedShapeError(f"<{node.tag}> has no {name}")
        return None
    try:
        return int(value)
    except ValueError:
        raise UnexpectedShapeError(f"<{node.tag}> {name} is not an integer: {value!r}") from None


def bool_field(node: Element, name: str) -> Optional[bool]:
    value = text_field(node, name)
    if value is None:
        return None
    return value.lower() == "true"


def _items(tree: Element, container: str, item: str) -> List[Element]:
    """Children of a listing; an absent container without an <error> is an empty list."""
    node = tree.find(container)
    if node is None:
        if find_error(tree) is not None:
            _raise_missing(tree, f"<{container}>")
        return []
    return node.findall(item)


# --- decoders ---

def decode_case_id(tree: Element) -> int:
    case = require_node(tree, "case")
    return int_field(case, "ixBug", required=True)


def decode_event(node: Element) -> CaseEvent:
    return CaseEvent(
        ix_bug_event=int_field(node, "ixBugEvent", required=True),
        description=text_field(node, "evtDescription", ""),
        verb=text_field(node, "sVerb", ""),
        person=text_field(node, "sPerson", ""),
        date=text_field(node, "dt"),
        text=text_field(node, "s", ""),
    )


def decode_case(node: Element) -> Case:
    events_node = node.find("events")
    events = [decode_event(e) for e in events_node.findall("event")] if events_node is not None else []
    return Case(
        ix_bug=int_field(node, "ixBug", required=True),
        title=text_field(node, "sTitle", ""),
        is_open=bool_field(node, "fOpen"),
        ix_status=int_field(node, "ixStatus"),
        ix_person_assigned_to=int_field(node, "ixPersonAssignedTo"),
        person_assigned_to=text_field(node, "sPersonAssignedTo", ""),
        events=events,
    )


def decode_cases(tree: Element) -> List[Case]:
    return [decode_case(node) for node in _items(tree, "cases", "case")]


def decode_single_case(tree: Element, case_id: int) -> Case:
    cases = decode_cases(tree)
    for case in cases:
        if case.ix_bug == case_id:
            return case
    _raise_missing(tree, f"case {case_id}")


def decode_status(tree: Element) -> Status:
    node = require_node(tree, "status")
    return Status(
        ix_status=int_field(node, "ixStatus", required=True),
        name=text_field(node, "sStatus", ""),
        ix_category=int_field(node, "ixCategory"),
        is_resolved=bool(bool_field(node, "fResolved")),
        is_duplicate=bool(bool_field(node, "fDuplicate")),
        is_deleted=bool(bool_field(node, "fDeleted")),
        order=int_field(node, "iOrder"),
    )


def decode_areas(tree: Element) -> dict:
    return {
        int_field(node, "ixArea", required=True): text_field(node, "sArea", "")
        for node in _items(tree, "areas", "area")
    }


def decode_categories(tree: Element) -> dict:
    return {
        int_field(node, "ixCategory", required=True): text_field(node, "sCategory", "")
        for node in _items(tree, "categories", "category")
    }


def decode_filters(tree: Element) -> List[Filter]:
    return [
        Filter(
            s_filter=node.get("sFilter", ""),
            name="".join(node.itertext()).strip(),
            filter_type=node.get("type", ""),
            is_current=node.get("status") == "current",
        )
        for node in _items(tree, "filters", "filter")
    ]


def decode_people(tree: Element) -> dict:
    people = {}
    for node in _items(tree, "people", "person"):
        person = Person(
            ix_person=int_field(node, "ixPerson", required=True),
            full_name=text_field(node, "sFullName", ""),
            email=text_field(node, "sEmail", ""),
        )
        people[person.ix_person] = person
    return people


def decode_priorities(tree: Element) -> dict:
    priorities = {}
    for node in _items(tree, "priorities", "priority"):
        priority = Priority(
            ix_priority=int_field(node, "ixPriority", required=True),
            name=text_field(node, "sPriority", ""),
            is_default=bool(bool_field(node, "fDefault")),
        )
        priorities[priority.ix_priority] = priority
    return priorities


def decode_projects(tree: Element) -> dict:
    projects = {}
    for node in _items(tree, "projects", "project"):
        project = Project(
            ix_project=int_field(node, "ixProject", required=True),
            name=text_field(node, "sProject", ""),
            ix_person_owner=int_field(node, "ixPersonOwner"),
        )
        projects[project.ix_project] = project
    return projects
