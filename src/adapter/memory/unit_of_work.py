from src.adapter.memory.repositories import (
    InMemoryAuditEventRepository,
    InMemoryIdentityRepository,
    InMemoryPendingAuthenticationRepository,
    InMemoryRevokedTokenRepository,
)
from src.adapter.memory.store import InMemoryStore
from src.app.services.unit_of_work import UnitOfWork


class InMemoryUnitOfWork(UnitOfWork):
    """UnitOfWork over an InMemoryStore. commit/rollback are no-ops."""

    def __init__(self, store: InMemoryStore):
        self.store = store

    async def __aenter__(self):
        self.identities = InMemoryIdentityRepository(self.store)
        self.pending_authentications = InMemoryPendingAuthenticationRepository(self.store)
        self.revoked_tokens = InMemoryRevokedTokenRepository(self.store)
        self.audit_events = InMemoryAuditEventRepository(self.store)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        pass

    async def rollback(self):
        pass
