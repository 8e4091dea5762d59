"""
FogBugz API layer package.
Implements the query-string/XML protocol: sessions, request building, transport and typed operations.
"""

from .client import FogBugzClient
from .data_models import Case, CaseEvent, Filter, Person, Priority, Project, Status
from .errors import (
    ApiError,
    FogBugzError,
    InvalidArgumentError,
    MalformedResponseError,
    NoResponseError,
    RequestTimeoutError,
    UnauthenticatedError,
    UnexpectedShapeError,
)
from .parameters import PARAMETER_ALIASES, build_query, translate_parameter
from .session import FogBugzSession

__all__ = [
    'FogBugzClient',
    'FogBugzSession',
    'Case',
    'CaseEvent',
    'Filter',
    'Person',
    'Priority',
    'Project',
    'Status',
    'FogBugzError',
    'ApiError',
    'InvalidArgumentError',
    'MalformedResponseError',
    'NoResponseError',
    'RequestTimeoutError',
    'UnauthenticatedError',
    'UnexpectedShapeError',
    'PARAMETER_ALIASES',
    'build_query',
    'translate_parameter',
]
