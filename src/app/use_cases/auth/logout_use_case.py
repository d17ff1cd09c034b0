"""
Logout Use Case

Adds the current access token to the revocation set.
"""

from src.libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, RevokedToken, Session
from .dtos import LogoutResponse


class LogoutUseCase:
    """
    Use case for logout.

    Business Rules:
    - Revocation is keyed by token id (jti)
    - Revoking an already revoked token is a no-op
    - Revocation is audit-logged
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session: Session) -> Result[LogoutResponse]:
        async with self.uow:
            added = await self.uow.revoked_tokens.add(
                RevokedToken(
                    token_id=session.token_id,
                    identity_id=session.identity_id,
                    expires_at=session.expires_at,
                )
            )

            if added:
                audit = AuditEvent(
                    identity_id=session.identity_id,
                    building_id=session.building_id,
                    action="logout",
                    event_metadata={"token_id": session.token_id},
                )
                await self.uow.audit_events.create(audit)

            await self.uow.commit()

            return Return.ok(LogoutResponse(status="success", message="Logged out"))
