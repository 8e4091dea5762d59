"""
Query string construction for the FogBugz XML API.

Every request is a flat list of ``name=value`` pairs selected by ``cmd``.
Friendly option names (``priority``, ``owner`` ...) are renamed to the API's
field names before encoding.
"""

from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Tuple, Union
from urllib.parse import quote_plus, unquote_plus

from .errors import InvalidArgumentError, UnauthenticatedError

LOGON_COMMAND = "logon"

PARAMETER_ALIASES = MappingProxyType({
    "area": "ixArea",
    "category": "ixCategory",
    "content": "sEvent",
    "description": "sEvent",
    "owner": "ixPersonAssignedTo",
    "priority": "ixPriority",
    "project": "ixProject",
})

Params = Union[Mapping[str, Any], Iterable[Tuple[str, Any]], None]


def translate_parameter(name: str) -> str:
    """Return the API field name for a friendly option name (unknown names pass through)."""
    return PARAMETER_ALIASES.get(name, name)


def encode_value(value: Any) -> str:
    """Form-encode a single parameter value."""
    return quote_plus(str(value))


def decode_value(encoded: str) -> str:
    return unquote_plus(encoded)


def _pairs(params: Params):
    if not params:
        return []
    if isinstance(params, Mapping):
        return list(params.items())
    return list(params)


def build_query(command: str, params: Params = None, token: str = "") -> str:
    """
    Build the query string for ``command``.

    ``params`` may be a mapping or a sequence of ``(name, value)`` pairs; order
    is kept as given. Pairs whose value is None are dropped. The session token,
    when present, always leads the query.
    """
    if not command:
        raise InvalidArgumentError("command must be specified")
    if not token and command != LOGON_COMMAND:
        raise UnauthenticatedError("Use login() before attempting to make a request")

    parts = []
    if token:
        parts.append(f"token={encode_value(token)}")
    parts.append(f"cmd={command}")
    for name, value in _pairs(params):
        if value is None:
            continue
        parts.append(f"{translate_parameter(name)}={encode_value(value)}")
    return "&".join(parts)


def require_id(value: Any, name: str) -> int:
    """Coerce a numeric identifier, rejecting missing, empty and non-positive values."""
    if value is None or isinstance(value, bool) or value == "":
        raise InvalidArgumentError(f"{name} must be specified")
    try:
        number = int(str(value).strip())
    except ValueError:
        raise InvalidArgumentError(f"{name} must be a positive integer, got {value!r}") from None
    if number <= 0:
        raise InvalidArgumentError(f"{name} must be a positive integer, got {value!r}")
    return number


def require_text(value: Optional[str], name: str) -> str:
    if value is None or not str(value):
        raise InvalidArgumentError(f"{name} must be specified")
    return str(value)


def mask_query(query: str) -> str:
    """Hide token and password values so a query can be logged."""
    masked = []
    for part in query.split("&"):
        key, sep, _ = part.partition("=")
        if key in ("token", "password") and sep:
            masked.append(f"{key}=***")
        else:
            masked.append(part)
    return "&".join(masked)
