"""
Typed FogBugz operations: tickets, metadata listings and search.

Each method builds one command, sends it through the session and decodes the
part of the response it needs.
"""

from typing import Dict, List, Mapping, Optional
from xml.etree.ElementTree import Element

from ..utils.logger import get_logger
from . import data_models
from .data_models import Case, Filter, Person, Priority, Project, Status
from .errors import InvalidArgumentError
from .parameters import require_id, require_text
from .session import FogBugzSession

logger = get_logger(__name__)

TICKET_COLUMNS = "fOpen,latestEvent,ixBugEvent,ixStatus,ixPersonAssignedTo,sPersonAssignedTo"
SEARCH_COLUMNS = "fOpen,ixStatus,ixPersonAssignedTo,sPersonAssignedTo,sTitle"


def _with_options(fixed: list, options: Optional[Mapping[str, object]]) -> list:
    params = list(fixed)
    if options:
        params.extend(options.items())
    return params


class FogBugzClient(FogBugzSession):
    """FogBugz API client. Log in first, then call the ticket and listing methods."""

    # --- tickets ---

    def open_ticket(self, title: str, description: str, options: Optional[Mapping[str, object]] = None) -> int:
        """
        Open a new case and return its ID.

        ``options`` takes friendly names (area, category, owner, priority,
        project) or raw API field names. Fields left out default to the last
        values used by the logged-in user.
        """
        if not title or not description:
            raise InvalidArgumentError("title and description must be specified")
        params = _with_options([("sTitle", title), ("sEvent", description)], options)
        case_id = data_models.decode_case_id(self.request("new", params))
        logger.info("Opened case %d", case_id)
        return case_id

    def update_ticket(self, case_id: int, content: str, options: Optional[Mapping[str, object]] = None) -> int:
        """Add an event to an existing case; returns the case ID to confirm."""
        ix_bug = require_id(case_id, "caseID")
        require_text(content, "content")
        params = _with_options([("ixBug", ix_bug), ("sEvent", content)], options)
        return data_models.decode_case_id(self.request("edit", params))

    def reopen_ticket(self, case_id: int, options: Optional[Mapping[str, object]] = None) -> int:
        """Reopen a closed case. ``owner`` and ``priority`` may be changed in the same call."""
        ix_bug = require_id(case_id, "caseID")
        params = _with_options([("ixBug", ix_bug)], options)
        return data_models.decode_case_id(self.request("reopen", params))

    def resolve_ticket(self, case_id: int, options: Optional[Mapping[str, object]] = None) -> int:
        ix_bug = require_id(case_id, "caseID")
        params = _with_options([("ixBug", ix_bug)], options)
        return data_models.decode_case_id(self.request("resolve", params))

    def close_ticket(self, case_id: int) -> int:
        ix_bug = require_id(case_id, "caseID")
        return data_models.decode_case_id(self.request("close", [("ixBug", ix_bug)]))

    def get_ticket(self, case_id: int) -> Case:
        """Return the case with its open state, status, assignee and latest event."""
        ix_bug = require_id(case_id, "caseID")
        tree = self.request("search", [("q", ix_bug), ("cols", TICKET_COLUMNS)])
        return data_models.decode_single_case(tree, ix_bug)

    def get_ticket_status(self, status_id: int) -> Status:
        ix_status = require_id(status_id, "statusID")
        return data_models.decode_status(self.request("viewStatus", [("ixStatus", ix_status)]))

    # --- listings ---

    def get_all_areas(self, project_id: int) -> Dict[int, str]:
        """Areas of a project, name indexed by ixArea."""
        ix_project = require_id(project_id, "projectID")
        return data_models.decode_areas(self.request("listAreas", [("ixProject", ix_project)]))

    def get_all_categories(self) -> Dict[int, str]:
        return data_models.decode_categories(self.request("listCategories"))

    def get_all_filters(self) -> List[Filter]:
        return data_models.decode_filters(self.request("listFilters"))

    def get_all_fogbugz_users(
        self,
        include_normal: bool = True,
        include_virtual: bool = False,
        include_community: bool = False,
    ) -> Dict[int, Person]:
        params = [
            ("fIncludeNormal", 1 if include_normal else None),
            ("fIncludeVirtual", 1 if include_virtual else None),
            ("fIncludeCommunity", 1 if include_community else None),
        ]
        return data_models.decode_people(self.request("listPeople", params))

    def get_all_priorities(self, raw: bool = False):
        """Priorities indexed by ixPriority, or the raw response tree when ``raw`` is set."""
        tree = self.request("listPriorities")
        if raw:
            return tree
        return data_models.decode_priorities(tree)

    def get_project_list(self, raw: bool = False):
        """Projects indexed by ixProject, or the raw response tree when ``raw`` is set."""
        tree = self.request("listProjects")
        if raw:
            return tree
        return data_models.decode_projects(tree)

    # --- filters and search ---

    def set_filter(self, filter_id: int) -> Element:
        s_filter = require_id(filter_id, "filterID")
        return self.request("setCurrentFilter", [("sFilter", s_filter)])

    def search(self, query: str = "") -> List[Case]:
        """Search cases; an empty query returns the cases of the current filter."""
        params = [("q", query or None), ("cols", SEARCH_COLUMNS)]
        return data_models.decode_cases(self.request("search", params))


__all__ = ["FogBugzClient", "Case", "Filter", "Person", "Priority", "Project", "Status"]
