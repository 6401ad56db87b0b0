"""Credential handling for the PhoneGap Build API.

The service accepts either an authentication token, passed as the
``auth_token`` query parameter, or a username/password pair sent with HTTP
Basic auth. A ``Credentials`` value only ever holds one of the two.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from .config import CREDENTIALS_FILE, PASSWORD_ENV, TOKEN_ENV, USERNAME_ENV

logger = logging.getLogger(__name__)


class Credentials(BaseModel):
    """Authentication state for a client: a token or a username/password."""

    model_config = ConfigDict(frozen=True)

    token: str = ""
    username: str = ""
    password: str = ""

    @model_validator(mode="after")
    def _check_single_mode(self) -> Credentials:
        if self.token and (self.username or self.password):
            raise ValueError("token cannot be combined with username/password")
        return self

    @classmethod
    def from_token(cls, token: str) -> Credentials:
        return cls(token=token)

    @classmethod
    def from_basic(cls, username: str, password: str) -> Credentials:
        return cls(username=username, password=password)

    @property
    def mode(self) -> Literal["token", "basic"] | None:
        """Active authentication mode, or None when nothing is set."""
        if self.token:
            return "token"
        if self.username or self.password:
            return "basic"
        return None

    @property
    def is_complete(self) -> bool:
        """Whether these credentials are enough to authenticate a request."""
        return bool(self.token) or bool(self.username and self.password)


def get_credentials(
    token: str | None = None,
    username: str | None = None,
    password: str | None = None,
    credentials_path: Path | None = None,
) -> Credentials:
    """Resolve credentials from the available sources.

    Checks in order of priority:
    1. Explicitly provided token or username/password
    2. PHONEGAP_BUILD_TOKEN, or PHONEGAP_BUILD_USERNAME and
       PHONEGAP_BUILD_PASSWORD environment variables
    3. ~/.phonegap-build/credentials.json file

    Args:
        token: Explicit authentication token.
        username: Explicit username.
        password: Explicit password.
        credentials_path: Path to credentials file.

    Returns:
        The first credentials found, or empty credentials if none were.
    """
    # 1. Check explicit parameters
    if token:
        return Credentials.from_token(token)
    if username or password:
        return Credentials.from_basic(username or "", password or "")

    # 2. Check environment variables
    env_token = os.environ.get(TOKEN_ENV)
    if env_token:
        return Credentials.from_token(env_token)
    env_username = os.environ.get(USERNAME_ENV)
    env_password = os.environ.get(PASSWORD_ENV)
    if env_username and env_password:
        return Credentials.from_basic(env_username, env_password)

    # 3. Check credentials file
    creds = load_credentials_from_file(credentials_path or CREDENTIALS_FILE)
    if creds is not None:
        return creds

    return Credentials()


def load_credentials_from_file(path: Path) -> Credentials | None:
    """Load credentials from a JSON file.

    Args:
        path: Path to the credentials file.

    Returns:
        Credentials if found and usable, None otherwise.
    """
    if not path.exists():
        return None
    try:
        creds = Credentials.model_validate_json(path.read_text())
    except (ValidationError, ValueError, OSError):
        logger.warning("Ignoring unreadable credentials file %s", path)
        return None
    return creds if creds.is_complete else None


def save_credentials(creds: Credentials, path: Path | None = None) -> None:
    """Save credentials to a JSON file readable only by the owner.

    Args:
        creds: Credentials to save.
        path: Destination. Defaults to ~/.phonegap-build/credentials.json.
    """
    creds_path = path or CREDENTIALS_FILE
    creds_path.parent.mkdir(parents=True, exist_ok=True)
    creds_path.write_text(creds.model_dump_json(exclude_defaults=True))
    # Restrict permissions to owner only
    creds_path.chmod(0o600)


def clear_credentials(path: Path | None = None) -> bool:
    """Remove stored credentials.

    Returns:
        True if a credentials file was removed, False if there was none.
    """
    creds_path = path or CREDENTIALS_FILE
    if creds_path.exists():
        creds_path.unlink()
        return True
    return False
