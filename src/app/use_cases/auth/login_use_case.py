"""
Login Use Case

Handles password authentication and either issues a building-scoped access
token or opens an OTP challenge, depending on the identity's role.
"""

import logging

from src.libs.result import Result, Return
from src.app.services.auth_components import AuthComponents
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, LoginIdentifier
from .dtos import IdentityInfo, LoginResponse

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for password login.

    Business Rules:
    - Credentials checked by the credential validator (constant time)
    - Role policy alone decides between direct token and OTP challenge
    - Direct path never creates a pending authentication
    - OTP path never returns a token
    - Direct path updates identity.last_login_at
    - Every successful step is audit-logged
    """

    def __init__(self, uow: UnitOfWork, components: AuthComponents):
        self.uow = uow
        self.components = components

    async def execute(self, identifier: LoginIdentifier, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            identifier: Tagged login identifier (email, phone, username, any)
            password: Plain text password

        Returns:
            Result with LoginResponse, or Error

        Errors:
            - INVALID_CREDENTIALS: Unknown identifier or wrong password
            - IDENTITY_DISABLED: Identity disabled or login access revoked
        """
        async with self.uow:
            validator = self.components.credential_validator(self.uow)
            result = await validator.validate(identifier, password)
            if result.is_err():
                logger.info(f"Login rejected for {identifier.kind.value}: {result.error.code}")
                return Return.err(result.error)

            identity = result.value

            if self.components.role_policy.requires_otp(identity.role):
                otp_manager = self.components.otp_manager(self.uow)
                pending = await otp_manager.issue(identity)

                audit = AuditEvent(
                    identity_id=identity.id,
                    building_id=identity.building_id,
                    action="otp_challenge_issued",
                    event_metadata={
                        "pending_id": str(pending.id),
                        "identifier_kind": identifier.kind.value,
                    },
                )
                await self.uow.audit_events.create(audit)

                await self.uow.commit()

                return Return.ok(
                    LoginResponse(
                        requires_otp=True,
                        pending_id=str(pending.id),
                        otp_expires_at=pending.expires_at,
                    )
                )

            session = self.components.session_issuer.issue(identity)

            identity.last_login_at = session.issued_at
            await self.uow.identities.update(identity)

            audit = AuditEvent(
                identity_id=identity.id,
                building_id=identity.building_id,
                action="login",
                event_metadata={
                    "token_id": session.token_id,
                    "identifier_kind": identifier.kind.value,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                LoginResponse(
                    requires_otp=False,
                    access_token=session.access_token,
                    token_type="bearer",
                    expires_at=session.expires_at,
                    identity=IdentityInfo.from_identity(identity),
                )
            )
