from typing import List, Optional
from uuid import UUID

from sqlmodel import or_, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.identity_repository import IIdentityRepository
from src.domain.entities import IdentifierKind, Identity, LoginIdentifier

IDENTIFIER_COLUMNS = {
    IdentifierKind.email: Identity.email,
    IdentifierKind.phone: Identity.phone,
    IdentifierKind.username: Identity.username,
}


class IdentityRepository(IIdentityRepository):
    """Identity repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, identity_id: UUID) -> Optional[Identity]:
        """Get identity by ID"""
        stmt = select(Identity).where(Identity.id == identity_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def find_by_identifier(self, identifier: LoginIdentifier) -> List[Identity]:
        """Find identities whose email/phone/username matches the identifier"""
        clauses = [
            IDENTIFIER_COLUMNS[kind] == value for kind, value in identifier.candidates()
        ]
        stmt = select(Identity).where(or_(*clauses))
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, identity: Identity) -> Identity:
        """Create a new identity"""
        self.session.add(identity)
        await self.session.flush()
        await self.session.refresh(identity)
        return identity

    async def update(self, identity: Identity) -> Identity:
        """Update existing identity"""
        self.session.add(identity)
        await self.session.flush()
        await self.session.refresh(identity)
        return identity
