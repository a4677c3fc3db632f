"""
Auth client settings read from the environment.
Base URL and group overrides are optional; the built-in defaults live in auth_config.py.
"""
import os

# Authorization service base URL override (unset -> built-in default)
AUTH_SERVER_URL = os.environ.get("AUTH_SERVER_URL", "").strip() or None

# Identity/group provider base URL override (unset -> built-in default)
IDENTITY_PROVIDER_URL = os.environ.get("AUTH_IDENTITY_PROVIDER_URL", "").strip() or None

# Group whose members are the known users (UUID string; unset -> built-in default)
USERS_GROUP_ID = os.environ.get("AUTH_USERS_GROUP_ID", "").strip() or None

# How long a login token is reused before RefreshingToken logs in again (seconds). Default 1 day.
TOKEN_REFRESH_INTERVAL_SECONDS = int(os.environ.get("AUTH_TOKEN_REFRESH_INTERVAL_SECONDS", "86400"))

# Timeout for the login request made by RefreshingToken (seconds)
LOGIN_TIMEOUT_SECONDS = float(os.environ.get("AUTH_LOGIN_TIMEOUT_SECONDS", "10.0"))
