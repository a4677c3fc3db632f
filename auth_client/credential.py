"""
Credentials for identity provider queries.
AuthConfig only stores a Credential; RefreshingToken is one that logs in to the authorization
service and logs in again once its token is older than the refresh interval.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING, Protocol

import httpx

from auth_client.config import LOGIN_TIMEOUT_SECONDS, TOKEN_REFRESH_INTERVAL_SECONDS
from auth_client.errors import InvalidArgumentError, TokenRefreshError

if TYPE_CHECKING:
    from auth_client.auth_config import AuthConfig

logger = logging.getLogger(__name__)


class Credential(Protocol):
    def get_token(self) -> str:
        """Return a currently valid token."""
        ...


class RefreshingToken:
    """
    Token obtained by logging in with a user id and password. The first login happens in the
    constructor so bad credentials fail fast; after that get_token() logs in again when the
    token is older than refresh_interval_seconds. Safe to share between threads.
    """

    def __init__(
        self,
        login_url: str,
        user_id: str,
        password: str,
        refresh_interval_seconds: int = TOKEN_REFRESH_INTERVAL_SECONDS,
        *,
        timeout: float = LOGIN_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ):
        if not login_url:
            raise InvalidArgumentError("login_url cannot be empty")
        if not isinstance(user_id, str) or not user_id.strip():
            raise InvalidArgumentError("user_id must be a non-empty string")
        if not isinstance(password, str) or not password:
            raise InvalidArgumentError("password must be a non-empty string")
        if (
            isinstance(refresh_interval_seconds, bool)
            or not isinstance(refresh_interval_seconds, (int, float))
            or refresh_interval_seconds <= 0
        ):
            raise InvalidArgumentError("refresh_interval_seconds must be positive")
        self._login_url = str(login_url)
        self._user_id = user_id.strip()
        self._password = password
        self._refresh_interval = refresh_interval_seconds
        self._timeout = timeout
        self._transport = transport
        self._lock = threading.Lock()
        self._token: str | None = None
        self._issued_at = 0.0
        with self._lock:
            self._login()

    @classmethod
    def for_config(
        cls,
        config: AuthConfig,
        user_id: str,
        password: str,
        refresh_interval_seconds: int = TOKEN_REFRESH_INTERVAL_SECONDS,
        **kwargs,
    ) -> RefreshingToken:
        """Log in against the login URL of the given configuration."""
        return cls(config.auth_login_url, user_id, password, refresh_interval_seconds, **kwargs)

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def refresh_interval_seconds(self) -> int:
        return self._refresh_interval

    def __repr__(self) -> str:
        return f"RefreshingToken(user_id={self._user_id!r}, login_url={self._login_url!r})"

    def get_token(self) -> str:
        with self._lock:
            if self._stale():
                self._login()
            return self._token

    def _stale(self) -> bool:
        return self._token is None or (time.monotonic() - self._issued_at) >= self._refresh_interval

    def _login(self) -> None:
        """POST user_id/password to the login URL and keep the returned token. Caller holds the lock."""
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                r = client.post(
                    self._login_url,
                    data={"user_id": self._user_id, "password": self._password, "fields": "token"},
                    headers={"Accept": "application/json"},
                )
        except httpx.HTTPError as e:
            logger.warning("Login request for %s to %s failed: %s", self._user_id, self._login_url, e)
            raise TokenRefreshError(f"Login request to {self._login_url} failed: {e}") from e

        if r.status_code != 200:
            logger.warning("Login for %s rejected with HTTP %s", self._user_id, r.status_code)
            raise TokenRefreshError(f"Login for {self._user_id} failed with HTTP {r.status_code}")

        try:
            token = r.json()["token"]
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Login response for %s did not contain a token", self._user_id)
            raise TokenRefreshError("Login response did not contain a token") from e
        if not isinstance(token, str) or not token:
            logger.warning("Login response for %s did not contain a token", self._user_id)
            raise TokenRefreshError("Login response did not contain a token")

        self._token = token
        self._issued_at = time.monotonic()
        logger.info("Obtained token for %s", self._user_id)
