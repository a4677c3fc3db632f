"""
Configuration for the auth client: where the authorization service and the identity/group
provider live, which group lists the known users, and an optional credential for provider
queries. In most cases the defaults work as-is.

AuthConfig is immutable. Each with_* method returns a new, validated copy, so one instance
can be shared between threads.
"""
import dataclasses
import logging
from dataclasses import dataclass
from uuid import UUID

from auth_client import config as settings
from auth_client.credential import Credential
from auth_client.errors import InvalidArgumentError, InvalidURLError
from auth_client.urls import normalize_base_url, resolve

logger = logging.getLogger(__name__)

_LOGIN_PATH = "Sessions/Login"
_GROUPS_PATH = "groups/"
_GROUP_MEMBERS_PATH = "/members/"
_USERS_PATH = "users/"


def _checked_default_url(url: str) -> str:
    try:
        return normalize_base_url(url)
    except InvalidURLError as e:
        raise AssertionError(f"Built-in default URL is malformed: {url!r}") from e


DEFAULT_AUTH_SERVER_URL = _checked_default_url("https://www.kbase.us/services/authorization/")
DEFAULT_IDENTITY_PROVIDER_URL = _checked_default_url("https://nexus.api.globusonline.org/")
DEFAULT_USERS_GROUP_ID = UUID("99d2a548-7218-11e2-adc0-12313d2d6e7f")


def _require(value, name: str) -> None:
    if value is None:
        raise InvalidArgumentError(f"{name} cannot be None")


@dataclass(frozen=True)
class AuthConfig:
    auth_server_url: str = DEFAULT_AUTH_SERVER_URL
    identity_provider_url: str = DEFAULT_IDENTITY_PROVIDER_URL
    users_group_id: UUID = DEFAULT_USERS_GROUP_ID
    credential: Credential | None = None

    def __post_init__(self):
        # Keyword construction goes through the same checks as the with_* methods.
        _require(self.auth_server_url, "auth_server_url")
        _require(self.identity_provider_url, "identity_provider_url")
        _require(self.users_group_id, "users_group_id")
        if not isinstance(self.users_group_id, UUID):
            raise InvalidArgumentError(
                f"users_group_id must be a UUID, got {type(self.users_group_id).__name__}"
            )
        object.__setattr__(self, "auth_server_url", normalize_base_url(self.auth_server_url))
        object.__setattr__(self, "identity_provider_url", normalize_base_url(self.identity_provider_url))

    @classmethod
    def from_env(cls) -> "AuthConfig":
        """
        Defaults, overridden by any AUTH_* settings present in auth_client.config.
        Overrides are applied through the with_* methods and validated the same way.
        """
        cfg = cls()
        if settings.AUTH_SERVER_URL:
            cfg = cfg.with_auth_server_url(settings.AUTH_SERVER_URL)
        if settings.IDENTITY_PROVIDER_URL:
            cfg = cfg.with_identity_provider_url(settings.IDENTITY_PROVIDER_URL)
        if settings.USERS_GROUP_ID:
            try:
                group_id = UUID(settings.USERS_GROUP_ID)
            except ValueError as e:
                raise InvalidArgumentError(
                    f"AUTH_USERS_GROUP_ID is not a valid UUID: {settings.USERS_GROUP_ID!r}"
                ) from e
            cfg = cfg.with_users_group_id(group_id)
        return cfg

    def with_auth_server_url(self, url) -> "AuthConfig":
        """
        Set the authorization service base URL. A trailing "/" is appended if missing.
        Raises InvalidArgumentError if url is None, InvalidURLError if it is not an absolute URI.
        """
        _require(url, "url")
        normalized = normalize_base_url(url)
        logger.debug("Auth server URL set to %s", normalized)
        return dataclasses.replace(self, auth_server_url=normalized)

    def with_identity_provider_url(self, url) -> "AuthConfig":
        """
        Set the identity/group provider base URL. A trailing "/" is appended if missing.
        Raises InvalidArgumentError if url is None, InvalidURLError if it is not an absolute URI.
        """
        _require(url, "url")
        normalized = normalize_base_url(url)
        logger.debug("Identity provider URL set to %s", normalized)
        return dataclasses.replace(self, identity_provider_url=normalized)

    def with_users_group_id(self, group_id: UUID) -> "AuthConfig":
        """Set the ID of the provider group that lists the known users."""
        _require(group_id, "group_id")
        return dataclasses.replace(self, users_group_id=group_id)

    def with_credential(self, credential: Credential) -> "AuthConfig":
        """
        Set the credential used for identity provider queries (validating user names and
        fetching user details). The reference is stored as-is; its refresh is its own business.

        To see every member of the users group, the principal behind this credential must
        administer that group. Otherwise members with private profiles are left out of
        group member queries, and the resulting user set is incomplete.
        """
        _require(credential, "credential")
        return dataclasses.replace(self, credential=credential)

    @property
    def auth_login_url(self) -> str:
        """Full URL for logging a user in with the authorization service."""
        return resolve(self.auth_server_url, _LOGIN_PATH)

    @property
    def group_members_url(self) -> str:
        """
        Full URL listing the members of the users group at the identity provider.
        Not every valid user is necessarily a member; see with_credential for visibility limits.
        """
        return resolve(self.identity_provider_url, _GROUPS_PATH + str(self.users_group_id) + _GROUP_MEMBERS_PATH)

    @property
    def users_url(self) -> str:
        """Full URL for querying any registered user at the identity provider, regardless of group."""
        return resolve(self.identity_provider_url, _USERS_PATH)
