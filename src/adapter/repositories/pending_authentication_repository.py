from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import delete, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.pending_authentication_repository import (
    IPendingAuthenticationRepository,
)
from src.domain.entities import PendingAuthentication


class PendingAuthenticationRepository(IPendingAuthenticationRepository):
    """PendingAuthentication repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, pending_id: UUID) -> Optional[PendingAuthentication]:
        """Get pending authentication by ID"""
        stmt = select(PendingAuthentication).where(PendingAuthentication.id == pending_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_identity_id(self, identity_id: UUID) -> Optional[PendingAuthentication]:
        """Get the challenge currently held by an identity"""
        stmt = select(PendingAuthentication).where(
            PendingAuthentication.identity_id == identity_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def replace_for_identity(
        self, pending: PendingAuthentication
    ) -> PendingAuthentication:
        """
        Replace the identity's challenge.

        The unique index on identity_id keeps a concurrent second insert from
        leaving two challenges behind; the losing transaction fails.
        """
        stmt = delete(PendingAuthentication).where(
            PendingAuthentication.identity_id == pending.identity_id
        )
        await self.session.execute(stmt)

        self.session.add(pending)
        await self.session.flush()
        await self.session.refresh(pending)
        return pending

    async def consume(self, pending_id: UUID, consumed_at: datetime) -> bool:
        """Single conditional UPDATE; only one caller can see rowcount 1"""
        stmt = (
            update(PendingAuthentication)
            .where(
                PendingAuthentication.id == pending_id,
                PendingAuthentication.consumed == False,  # noqa: E712
            )
            .values(consumed=True, consumed_at=consumed_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def record_failed_attempt(self, pending_id: UUID) -> int:
        """Increment attempts in the database, not from a stale read"""
        stmt = (
            update(PendingAuthentication)
            .where(PendingAuthentication.id == pending_id)
            .values(attempts=PendingAuthentication.attempts + 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

        result = await self.session.exec(
            select(PendingAuthentication.attempts).where(
                PendingAuthentication.id == pending_id
            )
        )
        attempts = result.one_or_none()
        return attempts or 0
