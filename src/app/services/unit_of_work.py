from abc import ABC, abstractmethod

from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.identity_repository import IIdentityRepository
from src.app.repositories.pending_authentication_repository import (
    IPendingAuthenticationRepository,
)
from src.app.repositories.revoked_token_repository import IRevokedTokenRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    identities: IIdentityRepository
    pending_authentications: IPendingAuthenticationRepository
    revoked_tokens: IRevokedTokenRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
