import logging

from fastapi import status
from src.libs.result import Error

logger = logging.getLogger(__name__)

# Credential and OTP failures all look the same to the caller
AUTHENTICATION_FAILED = Error("AUTHENTICATION_FAILED", "Authentication failed")

AUTHENTICATION_ERROR_CODES = (
    "INVALID_CREDENTIALS",
    "IDENTITY_DISABLED",
    "OTP_INVALID",
    "OTP_EXPIRED",
    "OTP_ALREADY_CONSUMED",
    "OTP_ATTEMPTS_EXCEEDED",
)


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def authentication_error(error: Error) -> Exception:
    """
    Turn an internal authentication failure into the uniform 401.

    The specific code is logged, never returned.
    """
    if error.code in AUTHENTICATION_ERROR_CODES:
        logger.info(f"Authentication failed: {error.code}")
        return ClientError(AUTHENTICATION_FAILED, status_code=status.HTTP_401_UNAUTHORIZED)
    return ServerError(error)
