"""
Pytest configuration for auth_client. Scrub AUTH_* settings so tests see the built-in defaults.
"""
import os

for _name in (
    "AUTH_SERVER_URL",
    "AUTH_IDENTITY_PROVIDER_URL",
    "AUTH_USERS_GROUP_ID",
    "AUTH_TOKEN_REFRESH_INTERVAL_SECONDS",
    "AUTH_LOGIN_TIMEOUT_SECONDS",
):
    if _name in os.environ:
        del os.environ[_name]
