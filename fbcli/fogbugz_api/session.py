"""
Session handling for the FogBugz XML API: endpoint, token and login state.
"""

from typing import Optional
from xml.etree import ElementTree

import requests

from ..utils.logger import get_logger
from .errors import (
    ApiError,
    FogBugzError,
    InvalidArgumentError,
    UnexpectedShapeError,
)
from .parameters import LOGON_COMMAND, Params, build_query, mask_query
from .transport import (
    DEFAULT_TIMEOUT,
    error_code,
    error_message,
    find_error,
    parse_response,
    send_request,
)

logger = get_logger(__name__)


class FogBugzSession:
    """
    Holds the API endpoint and the authentication token.

    Creating a session never touches the network; call login() (or set_token()
    with a token obtained elsewhere) before issuing commands.
    """

    def __init__(self, endpoint: str, timeout: float = DEFAULT_TIMEOUT, http: Optional[requests.Session] = None):
        self._endpoint = endpoint
        self._token = ""
        self._last_error: Optional[str] = None
        self.timeout = timeout
        self.http = http or requests.Session()

    # --- accessors ---

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def token(self) -> str:
        return self._token

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    def get_endpoint(self) -> str:
        return self._endpoint

    def set_endpoint(self, value: str) -> None:
        self._endpoint = value

    def get_token(self) -> str:
        return self._token

    def set_token(self, value: Optional[str]) -> None:
        self._token = value or ""

    def get_last_error(self) -> Optional[str]:
        return self._last_error

    def set_last_error(self, value: Optional[str]) -> None:
        self._last_error = value

    # --- lifecycle ---

    def close(self) -> None:
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def server_status(self) -> bool:
        """Return True if the endpoint answers an HTTP request at all."""
        if not self._endpoint:
            raise InvalidArgumentError("URL for FogBugz API not specified")
        try:
            self.http.get(self._endpoint, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            logger.warning("FogBugz server at %s is unreachable: %s", self._endpoint, exc)
            return False
        return True

    def login(self, email: str, password: str) -> str:
        """
        Log on with an email address and password.

        The token returned by the server is stored on the session and returned.
        """
        if not self._endpoint:
            raise InvalidArgumentError("URL for FogBugz API not specified")
        if not email or not password:
            raise InvalidArgumentError("Credentials for use with the FogBugz API must be specified")

        # logon never carries a stale token
        self._token = ""
        tree = self.request(LOGON_COMMAND, [("email", email), ("password", password)])

        token = tree.findtext("token")
        if token:
            self._token = token.strip()
            logger.info("Logged on to %s as %s", self._endpoint, email)
            return self._token

        error = find_error(tree)
        if error is not None:
            raise ApiError(error_message(error), error_code(error))
        if tree.find("people") is not None:
            message = f"Ambiguous logon: more than one person matches {email}"
            self._last_error = message
            raise ApiError(message)
        raise UnexpectedShapeError("Logon response did not contain a token")

    def logout(self) -> Optional[ElementTree.Element]:
        """
        Log off and forget the token.

        The local token is cleared even when the remote call fails, so this is
        safe to call repeatedly.
        """
        if not self._token:
            return None
        tree = None
        try:
            tree = self.request("logoff")
        except FogBugzError as exc:
            logger.warning("Logoff request failed, clearing local token anyway: %s", exc)
        finally:
            self._token = ""
        return tree

    # --- requests ---

    def request(self, command: str, params: Params = None) -> ElementTree.Element:
        """
        Send one command and return the parsed response tree.

        An <error> element in the response is recorded in last_error but does
        not raise; operations that need a specific payload decide for
        themselves.
        """
        query = build_query(command, params, self._token)
        if not self._endpoint:
            raise InvalidArgumentError("URL for FogBugz API not specified")
        logger.debug("FogBugz request: %s", mask_query(query))

        try:
            body = send_request(self.http, self._endpoint, query, self.timeout)
            tree = parse_response(body)
        except FogBugzError as exc:
            self._last_error = str(exc)
            raise

        error = find_error(tree)
        if error is not None:
            self._last_error = error_message(error)
            logger.warning("FogBugz %s returned an error: %s", command, self._last_error)
        return tree

