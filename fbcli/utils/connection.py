"""Build an authenticated FogBugz client from the CLI configuration."""

from typing import Optional

from ..fogbugz_api import FogBugzClient, UnauthenticatedError
from .config import FogBugzSettings, load_settings
from .logger import get_logger

log = get_logger(__name__)


def connect(settings: Optional[FogBugzSettings] = None) -> FogBugzClient:
    """
    Return a client ready for commands.

    A stored FOGBUGZ_TOKEN is used as-is; otherwise FOGBUGZ_EMAIL and
    FOGBUGZ_PASSWORD are used to log in.
    """
    settings = settings or load_settings()
    client = FogBugzClient(settings.url, timeout=settings.timeout)
    if settings.token:
        log.debug("Using stored FogBugz token")
        client.set_token(settings.token)
    elif settings.has_credentials:
        client.login(settings.email, settings.password)
    else:
        client.close()
        raise UnauthenticatedError(
            "No FogBugz token or credentials: set FOGBUGZ_TOKEN, or FOGBUGZ_EMAIL and FOGBUGZ_PASSWORD, or run `fbcli login`"
        )
    return client
