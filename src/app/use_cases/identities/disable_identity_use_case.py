"""
Disable Identity Use Case

Soft-disables an identity. Identities are never deleted.
"""

from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, IdentityStatus
from .dtos import IdentityResponse
from .register_identity_use_case import to_identity_response


class DisableIdentityUseCase:
    """
    Disable Identity Use Case

    Business Logic:
    1. Validate identity exists
    2. Set status=disabled (row is kept)
    3. Create audit event

    Idempotent: disabling an already-disabled identity succeeds without a new audit event.
    Login and OTP verification fail from then on, and tokens already issued
    are rejected by the authorization guard on their next use.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, identity_id: UUID) -> Result[IdentityResponse]:
        async with self.uow:
            identity = await self.uow.identities.get_by_id(identity_id)
            if identity is None:
                return Return.err(Error("IDENTITY_NOT_FOUND", "Identity not found"))

            if identity.status != IdentityStatus.disabled:
                identity.status = IdentityStatus.disabled
                identity.updated_at = utcnow()
                identity = await self.uow.identities.update(identity)

                audit = AuditEvent(
                    identity_id=identity.id,
                    building_id=identity.building_id,
                    action="identity_disabled",
                )
                await self.uow.audit_events.create(audit)

                await self.uow.commit()

            return Return.ok(to_identity_response(identity))
