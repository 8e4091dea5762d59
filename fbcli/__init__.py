"""
FogBugz CLI: command-line interface and Python client for the FogBugz XML API.

The client (``fbcli.fogbugz_api``) logs on, keeps the session token and turns
API commands into typed results; the CLI exposes each operation as a command.
"""

__version__ = "1.0.0"
__author__ = "fbcli developers"

__all__ = ["__version__"]
