"""
Resend OTP Use Case

Replaces an open OTP challenge with a fresh code.
"""

from uuid import UUID

from src.libs.result import Result, Return
from src.app.services.auth_components import AuthComponents
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from .dtos import LoginResponse


class ResendOtpUseCase:
    """
    Use case for re-sending an OTP.

    Business Rules:
    - Only an unconsumed challenge can be re-sent
    - The old challenge is invalidated (new pending_id returned)
    - Expired challenges may be re-sent; the identity already proved the password
    """

    def __init__(self, uow: UnitOfWork, components: AuthComponents):
        self.uow = uow
        self.components = components

    async def execute(self, pending_id: UUID) -> Result[LoginResponse]:
        async with self.uow:
            otp_manager = self.components.otp_manager(self.uow)
            result = await otp_manager.resend(pending_id)
            if result.is_err():
                return Return.err(result.error)

            pending = result.value

            audit = AuditEvent(
                identity_id=pending.identity_id,
                action="otp_resent",
                event_metadata={
                    "previous_pending_id": str(pending_id),
                    "pending_id": str(pending.id),
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
