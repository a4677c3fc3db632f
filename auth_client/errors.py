"""Errors raised by the auth client configuration and credential providers."""


class AuthClientError(Exception):
    """Base class for auth client errors."""


class InvalidArgumentError(AuthClientError, ValueError):
    """A required argument was missing or of the wrong type."""


class InvalidURLError(AuthClientError, ValueError):
    """A URL is not a valid absolute URI."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class TokenRefreshError(AuthClientError):
    """Logging in to obtain a fresh token failed."""
