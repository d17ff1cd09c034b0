from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.adapter.repositories.identity_repository import IdentityRepository
from src.adapter.repositories.pending_authentication_repository import (
    PendingAuthenticationRepository,
)
from src.adapter.repositories.revoked_token_repository import RevokedTokenRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.identities = IdentityRepository(self.session)
        self.pending_authentications = PendingAuthenticationRepository(self.session)
        self.revoked_tokens = RevokedTokenRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
