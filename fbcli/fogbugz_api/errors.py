"""
Exceptions raised by the FogBugz API layer.
"""

from typing import Optional


class FogBugzError(Exception):
    """Base class for every error raised by the FogBugz client."""


class InvalidArgumentError(FogBugzError):
    """A required value is missing, empty or not a positive identifier."""


class UnauthenticatedError(FogBugzError):
    """A command other than logon was attempted without a session token."""


class RequestTimeoutError(FogBugzError):
    """The HTTP request did not complete within the configured timeout."""


class NoResponseError(FogBugzError):
    """The server returned nothing usable (empty body, connection failure, HTTP error)."""


class MalformedResponseError(FogBugzError):
    """The response body is not well-formed XML."""


class ApiError(FogBugzError):
    """The response carried an <error> element."""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self):
        if self.code is not None:
            return f"[{self.code}] {self.message}"
        return self.message


class UnexpectedShapeError(FogBugzError):
    """The response lacks the element or field an operation needs."""
