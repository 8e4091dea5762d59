"""
Configuration utilities for the fbcli tool.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv, set_key, unset_key
from pydantic import BaseModel, Field, ValidationError, field_validator

ENV_FILE_NAME = ".fbcli.env"


def load_env_vars() -> None:
    """
    Load environment variables from .env files in the following order:
    1. .fbcli.env in the current directory
    2. .fbcli.env in the user's home directory
    Values already present in the environment win.
    """
    if os.path.exists(ENV_FILE_NAME):
        load_dotenv(ENV_FILE_NAME)

    home_env = user_env_file()
    if home_env.exists():
        load_dotenv(home_env)


def user_env_file() -> Path:
    return Path.home() / ENV_FILE_NAME


def get_config(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get configuration value from environment variables."""
    return os.getenv(key, default)


class FogBugzSettings(BaseModel):
    """Connection settings read from FOGBUGZ_* environment variables."""

    url: str = Field(..., min_length=1, description="FogBugz api.asp endpoint")
    email: Optional[str] = None
    password: Optional[str] = None
    token: Optional[str] = None
    timeout: float = Field(10.0, gt=0, description="Request timeout in seconds")

    @field_validator("url")
    @classmethod
    def strip_url(cls, v: str) -> str:
        return v.strip()

    @field_validator("email", "password", "token")
    @classmethod
    def blank_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def has_credentials(self) -> bool:
        return bool(self.email and self.password)


class ConfigError(Exception):
    """Raised when the FOGBUGZ_* settings are missing or invalid."""


def load_settings() -> FogBugzSettings:
    """Build settings from the environment (call load_env_vars() first)."""
    values = {
        "url": get_config("FOGBUGZ_URL", ""),
        "email": get_config("FOGBUGZ_EMAIL"),
        "password": get_config("FOGBUGZ_PASSWORD"),
        "token": get_config("FOGBUGZ_TOKEN"),
    }
    timeout = get_config("FOGBUGZ_TIMEOUT")
    if timeout:
        values["timeout"] = timeout
    try:
        return FogBugzSettings(**values)
    except ValidationError as exc:
        fields = ", ".join("FOGBUGZ_" + str(err["loc"][0]).upper() for err in exc.errors())
        raise ConfigError(f"Invalid FogBugz configuration: {fields}") from exc


def save_token(token: Optional[str]) -> Path:
    """
    Store (or with an empty token, remove) FOGBUGZ_TOKEN in ~/.fbcli.env so
    later invocations can skip logging in.
    """
    env_path = user_env_file()
    if token:
        env_path.touch(exist_ok=True)
        set_key(str(env_path), "FOGBUGZ_TOKEN", token)
        os.environ["FOGBUGZ_TOKEN"] = token
    else:
        if env_path.exists():
            unset_key(str(env_path), "FOGBUGZ_TOKEN")
        os.environ.pop("FOGBUGZ_TOKEN", None)
    return env_path
