"""
Credential Validator

Checks a login identifier and password against stored identities. Knows
nothing about sessions or OTP.
"""

import logging

import bcrypt

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Identity, LoginIdentifier

logger = logging.getLogger(__name__)

# Checked when no identity matches so both paths pay one bcrypt comparison
_DUMMY_HASH = bcrypt.hashpw(b"building-access-dummy-password", bcrypt.gensalt(12)).decode()

INVALID_CREDENTIALS = Error("INVALID_CREDENTIALS", "Invalid credentials")


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(12)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Malformed stored hash, or password over bcrypt's 72-byte limit
        return False


class CredentialValidator:
    """
    Validates identifier + password.

    Business Rules:
    - Identifier lookup is kind-agnostic (email, phone, username or any)
    - Constant-time password comparison, even when no identity matches
    - Ambiguous identifiers (several identities) fail closed
    - Error never reveals whether identifier or password was wrong
    - Disabled identities are rejected after the password check
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def validate(self, identifier: LoginIdentifier, password: str) -> Result[Identity]:
        """
        Validate credentials.

        Args:
            identifier: Tagged login identifier
            password: Plain text password

        Returns:
            Result with the matching Identity, or Error

        Errors:
            - INVALID_CREDENTIALS: No unique identity or wrong password
            - IDENTITY_DISABLED: Identity disabled or login access revoked
        """
        matches = await self.uow.identities.find_by_identifier(identifier)

        if len(matches) != 1:
            verify_password(password, _DUMMY_HASH)
            if matches:
                logger.warning(
                    f"Identifier {identifier.kind.value} matched {len(matches)} identities"
                )
            return Return.err(INVALID_CREDENTIALS)

        identity = matches[0]
        if not verify_password(password, identity.password_hash):
            return Return.err(INVALID_CREDENTIALS)

        if not identity.is_login_allowed:
            return Return.err(Error("IDENTITY_DISABLED", "Identity is disabled"))

        return Return.ok(identity)
