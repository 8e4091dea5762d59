"""
HTTP transport and XML response interpretation for the FogBugz API.
"""

from typing import Optional, Union
from xml.etree import ElementTree

import requests

from ..utils.logger import get_logger
from .errors import MalformedResponseError, NoResponseError, RequestTimeoutError

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 10
NO_XML_MESSAGE = "No XML returned"


def send_request(http: requests.Session, endpoint: str, query: str, timeout: float = DEFAULT_TIMEOUT) -> bytes:
    """
    GET ``endpoint?query`` and return the raw response body.

    Raises RequestTimeoutError when the deadline passes and NoResponseError for
    connection failures or non-2xx statuses.
    """
    url = f"{endpoint}?{query}"
    try:
        response = http.get(url, timeout=timeout)
    except requests.exceptions.Timeout as exc:
        raise RequestTimeoutError(f"Request timed out after {timeout} seconds") from exc
    except requests.exceptions.RequestException as exc:
        raise NoResponseError(f"{NO_XML_MESSAGE}: {exc}") from exc

    logger.debug("HTTP %s, %d bytes", response.status_code, len(response.content or b""))
    if not response.ok:
        raise NoResponseError(f"{NO_XML_MESSAGE}: HTTP {response.status_code}")
    return response.content


def parse_response(body: Optional[Union[str, bytes]]) -> ElementTree.Element:
    """Parse a response body into an element tree rooted at <response>."""
    if body is None or not body.strip():
        raise NoResponseError(NO_XML_MESSAGE)
    try:
        return ElementTree.fromstring(body.strip())
    except ElementTree.ParseError as exc:
        raise MalformedResponseError(f"Response is not well-formed XML: {exc}") from exc


def find_error(tree: ElementTree.Element) -> Optional[ElementTree.Element]:
    """Return the top-level <error> element of a response, if any."""
    if tree.tag == "error":
        return tree
    return tree.find("error")


def error_message(error: ElementTree.Element) -> str:
    return "".join(error.itertext()).strip()


def error_code(error: ElementTree.Element) -> Optional[int]:
    code = error.get("code")
    if code is None:
        return None
    try:
        return int(code)
    except ValueError:
        return None
