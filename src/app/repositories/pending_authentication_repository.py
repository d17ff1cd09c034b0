from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import PendingAuthentication


class IPendingAuthenticationRepository(ABC):
    """PendingAuthentication repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, pending_id: UUID) -> Optional[PendingAuthentication]:
        """Get pending authentication by ID"""
        pass

    @abstractmethod
    async def get_by_identity_id(self, identity_id: UUID) -> Optional[PendingAuthentication]:
        """Get the challenge currently held by an identity, if any"""
        pass

    @abstractmethod
    async def replace_for_identity(
        self, pending: PendingAuthentication
    ) -> PendingAuthentication:
        """Delete any challenge held by pending.identity_id, then store pending"""
        pass

    @abstractmethod
    async def consume(self, pending_id: UUID, consumed_at: datetime) -> bool:
        """
        Atomically flip consumed False -> True.

        Returns True only for the single caller that performed the flip.
        """
        pass

    @abstractmethod
    async def record_failed_attempt(self, pending_id: UUID) -> int:
        """Atomically increment attempts. Returns the new count (0 if missing)."""
        pass
