"""Credentials for tracker requests.

Credentials are one of three shapes:
- NoAuth: anonymous access
- BasicAuth: user name and password
- TokenAuth: personal access token

Visual Studio Online accepts personal access tokens over HTTP Basic
authentication with an empty user name.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

import httpx

if TYPE_CHECKING:
    from vsonline.config.manager import ConfigManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoAuth:
    """Anonymous access."""

    def to_httpx_auth(self) -> httpx.Auth | None:
        return None


@dataclass(frozen=True)
class BasicAuth:
    """User name and password credentials."""

    username: str
    password: str = field(repr=False)

    def to_httpx_auth(self) -> httpx.Auth | None:
        return httpx.BasicAuth(self.username, self.password)


@dataclass(frozen=True)
class TokenAuth:
    """Personal access token credentials."""

    token: str = field(repr=False)

    def to_httpx_auth(self) -> httpx.Auth | None:
        return httpx.BasicAuth("", self.token)


Credentials: TypeAlias = NoAuth | BasicAuth | TokenAuth


def to_httpx_auth(credentials: Credentials | None) -> httpx.Auth | None:
    """Convert credentials to an httpx auth object.

    Args:
        credentials: Credentials, or None for anonymous access

    Returns:
        httpx auth object, or None when no authentication is attached
    """
    if credentials is None:
        return None
    return credentials.to_httpx_auth()


class AuthenticationManager:
    """Resolve tracker credentials from configuration.

    Precedence:
        1. TRACKER_TOKEN -> TokenAuth
        2. TRACKER_USERNAME (+ TRACKER_PASSWORD) -> BasicAuth
        3. Nothing configured -> NoAuth

    Attributes:
        _config: ConfigManager instance for loading credentials
    """

    def __init__(self, config: ConfigManager) -> None:
        """Initialize with ConfigManager.

        Args:
            config: ConfigManager instance (should have load() called)
        """
        self._config = config

    def get_credentials(self) -> Credentials:
        """Get credentials for tracker requests.

        Returns:
            The configured credentials, NoAuth if none are configured
        """
        settings = self._config.settings

        if settings.tracker_token:
            if settings.tracker_username:
                logger.debug("Both token and user name configured; using token")
            return TokenAuth(settings.tracker_token)

        if settings.tracker_username:
            return BasicAuth(settings.tracker_username, settings.tracker_password)

        if settings.tracker_password:
            logger.warning("TRACKER_PASSWORD is set without TRACKER_USERNAME; ignoring it")
        return NoAuth()


__all__ = [
    "AuthenticationManager",
    "BasicAuth",
    "Credentials",
    "NoAuth",
    "TokenAuth",
    "to_httpx_auth",
]
