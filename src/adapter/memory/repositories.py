from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.adapter.memory.store import InMemoryStore
from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.identity_repository import IIdentityRepository
from src.app.repositories.pending_authentication_repository import (
    IPendingAuthenticationRepository,
)
from src.app.repositories.revoked_token_repository import IRevokedTokenRepository
from src.domain.entities import (
    AuditEvent,
    IdentifierKind,
    Identity,
    LoginIdentifier,
    PendingAuthentication,
    RevokedToken,
)

IDENTIFIER_FIELDS = {
    IdentifierKind.email: "email",
    IdentifierKind.phone: "phone",
    IdentifierKind.username: "username",
}


class InMemoryIdentityRepository(IIdentityRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_id(self, identity_id: UUID) -> Optional[Identity]:
        with self.store.lock:
            return self.store.identities.get(identity_id)

    async def find_by_identifier(self, identifier: LoginIdentifier) -> List[Identity]:
        candidates = [
            (IDENTIFIER_FIELDS[kind], value) for kind, value in identifier.candidates()
        ]
        with self.store.lock:
            return [
                identity
                for identity in self.store.identities.values()
                if any(getattr(identity, field) == value for field, value in candidates)
            ]

    async def create(self, identity: Identity) -> Identity:
        with self.store.lock:
            self.store.identities[identity.id] = identity
        return identity

    async def update(self, identity: Identity) -> Identity:
        with self.store.lock:
            self.store.identities[identity.id] = identity
        return identity


class InMemoryPendingAuthenticationRepository(IPendingAuthenticationRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_id(self, pending_id: UUID) -> Optional[PendingAuthentication]:
        with self.store.lock:
            return self.store.pending_authentications.get(pending_id)

    async def get_by_identity_id(self, identity_id: UUID) -> Optional[PendingAuthentication]:
        with self.store.lock:
            for pending in self.store.pending_authentications.values():
                if pending.identity_id == identity_id:
                    return pending
        return None

    async def replace_for_identity(
        self, pending: PendingAuthentication
    ) -> PendingAuthentication:
        table = self.store.pending_authentications
        with self.store.lock:
            stale = [pid for pid, p in table.items() if p.identity_id == pending.identity_id]
            for pid in stale:
                del table[pid]
            table[pending.id] = pending
        return pending

    async def consume(self, pending_id: UUID, consumed_at: datetime) -> bool:
        with self.store.lock:
            pending = self.store.pending_authentications.get(pending_id)
            if pending is None or pending.consumed:
                return False
            pending.consumed = True
            pending.consumed_at = consumed_at
            return True

    async def record_failed_attempt(self, pending_id: UUID) -> int:
        with self.store.lock:
            pending = self.store.pending_authentications.get(pending_id)
            if pending is None:
                return 0
            pending.attempts += 1
            return pending.attempts


class InMemoryRevokedTokenRepository(IRevokedTokenRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def is_revoked(self, token_id: str) -> bool:
        with self.store.lock:
            return token_id in self.store.revoked_tokens

    async def add(self, revoked: RevokedToken) -> bool:
        with self.store.lock:
            if revoked.token_id in self.store.revoked_tokens:
                return False
            self.store.revoked_tokens[revoked.token_id] = revoked
            return True


class InMemoryAuditEventRepository(IAuditEventRepository):
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        with self.store.lock:
            self.store.audit_events.append(audit_event)
        return audit_event
