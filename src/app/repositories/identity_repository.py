from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Identity, LoginIdentifier


class IIdentityRepository(ABC):
    """Identity repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, identity_id: UUID) -> Optional[Identity]:
        """Get identity by ID"""
        pass

    @abstractmethod
    async def find_by_identifier(self, identifier: LoginIdentifier) -> List[Identity]:
        """
        Find identities matching a login identifier.

        The identifier kind decides which of email/phone/username are searched;
        kind=any searches all three. Returns every match so callers can
        fail closed on ambiguity.
        """
        pass

    @abstractmethod
    async def create(self, identity: Identity) -> Identity:
        """Create a new identity"""
        pass

    @abstractmethod
    async def update(self, identity: Identity) -> Identity:
        """Update existing identity"""
        pass
