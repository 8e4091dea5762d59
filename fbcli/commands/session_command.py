from rich.console import Console

from ..fogbugz_api import FogBugzClient
from ..utils.config import load_settings, save_token
from ..utils.connection import connect

console = Console()


def handle_login(args):
    """
    Logs on with the given (or configured) credentials and stores the token
    in ~/.fbcli.env for later commands.
    """
    settings = load_settings()
    email = getattr(args, 'email', None) or settings.email
    password = getattr(args, 'password', None) or settings.password

    with FogBugzClient(settings.url, timeout=settings.timeout) as client:
        token = client.login(email, password)

    if getattr(args, 'save', True):
        env_path = save_token(token)
        console.print(f"Logged in as {email}; token saved to {env_path}")
    else:
        console.print(f"Logged in as {email}")
        console.print(token)
    return token


def handle_logout(args):
    """Logs off the stored session and removes the saved token."""
    settings = load_settings()
    if settings.token:
        with connect(settings) as client:
            client.logout()
    save_token(None)
    console.print("Logged out.")


def handle_server_status(args):
    settings = load_settings()
    with FogBugzClient(settings.url, timeout=settings.timeout) as client:
        reachable = client.server_status()
    if reachable:
        console.print(f"[green]FogBugz at {settings.url} is reachable.[/green]")
    else:
        console.print(f"[red]FogBugz at {settings.url} is not reachable.[/red]")
    return reachable
