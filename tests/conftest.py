"""Pytest configuration and shared fixtures."""

from unittest.mock import MagicMock
from urllib.parse import urlsplit

import pytest
import requests

from fbcli.fogbugz_api import FogBugzClient

ENDPOINT = "https://example.fogbugz.com/api.asp"


def make_response(body, status_code=200):
    """Build a stand-in for requests.Response carrying ``body``."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.content = body.encode("utf-8") if isinstance(body, str) else body
    return response


def sent_query(http, call_index=-1):
    """Return the query string of a GET issued on the mocked session."""
    url = http.get.call_args_list[call_index][0][0]
    return urlsplit(url).query


@pytest.fixture
def http():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(http):
    """An authenticated client whose HTTP session is a mock."""
    c = FogBugzClient(ENDPOINT, http=http)
    c.set_token("tok123")
    return c


@pytest.fixture
def respond(http):
    """Queue one or more XML bodies as the next responses."""
    def _respond(*bodies, status_code=200):
        responses = [make_response(b, status_code) for b in bodies]
        if len(responses) == 1:
            http.get.return_value = responses[0]
        else:
            http.get.side_effect = responses
    return _respond


@pytest.fixture
def last_query(http):
    """Return the query string of the most recent GET."""
    return lambda index=-1: sent_query(http, index)
