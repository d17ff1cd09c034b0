"""
Admin API Key Authentication

Validates admin API keys for identity administration endpoints.
"""

import hmac

from fastapi import Header, status
from src.libs.result import Error
from src.api.error import ClientError
from config import ApplicationConfig


async def verify_admin_api_key(x_admin_api_key: str = Header(None)):
    """
    Verify admin API key from X-Admin-API-Key header.

    Used by the onboarding back office to register and disable identities.
    Different from bearer-token authentication - this is service-to-service auth.

    Raises:
        ClientError: 401 if key is missing, invalid, or no key is configured

    Returns:
        True if valid
    """
    if not x_admin_api_key:
        raise ClientError(
            Error("UNAUTHORIZED", "Admin API key required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    valid_admin_key = ApplicationConfig.ADMIN_API_KEY

    # An unset key disables the admin API entirely
    if not valid_admin_key or not hmac.compare_digest(
        x_admin_api_key.encode(), valid_admin_key.encode()
    ):
        raise ClientError(
            Error("INVALID_API_KEY", "Invalid admin API key"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return True
