"""
Verify OTP Use Case

Completes an OTP challenge and issues the access token.
"""

import logging
from uuid import UUID

from src.libs.result import Result, Return
from src.app.services.auth_components import AuthComponents
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from .dtos import IdentityInfo, TokenResponse

logger = logging.getLogger(__name__)


class VerifyOtpUseCase:
    """
    Use case for OTP verification.

    Business Rules:
    - Exactly one verification of a challenge can succeed
    - Failed attempts are persisted (attempt counter survives the request)
    - Success updates identity.last_login_at and is audit-logged
    """

    def __init__(self, uow: UnitOfWork, components: AuthComponents):
        self.uow = uow
        self.components = components

    async def execute(self, pending_id: UUID, code: str) -> Result[TokenResponse]:
        """
        Execute verify OTP use case.

        Args:
            pending_id: Challenge handle returned by login
            code: Code received through the delivery channel

        Returns:
            Result with TokenResponse, or Error

        Errors:
            - OTP_INVALID, OTP_EXPIRED, OTP_ALREADY_CONSUMED,
              OTP_ATTEMPTS_EXCEEDED, IDENTITY_DISABLED
        """
        async with self.uow:
            otp_manager = self.components.otp_manager(self.uow)
            result = await otp_manager.verify(pending_id, code)

            if result.is_err():
                # Persist attempt counters
                await self.uow.commit()
                logger.info(f"OTP verification rejected for {pending_id}: {result.error.code}")
                return Return.err(result.error)

            session = result.value
            identity = await self.uow.identities.get_by_id(session.identity_id)

            identity.last_login_at = session.issued_at
            await self.uow.identities.update(identity)

            audit = AuditEvent(
                identity_id=identity.id,
                building_id=session.building_id,
                action="otp_verified",
                event_metadata={
                    "pending_id": str(pending_id),
                    "token_id": session.token_id,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(
                TokenResponse(
                    access_token=session.access_token,
                    expires_at=session.expires_at,
                    identity=IdentityInfo.from_identity(identity),
                )
            )
