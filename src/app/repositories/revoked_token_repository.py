from abc import ABC, abstractmethod

from src.domain.entities import RevokedToken


class IRevokedTokenRepository(ABC):
    """RevokedToken repository interface - application layer"""

    @abstractmethod
    async def is_revoked(self, token_id: str) -> bool:
        """Check whether a token id is in the revocation set"""
        pass

    @abstractmethod
    async def add(self, revoked: RevokedToken) -> bool:
        """Add token id to the revocation set. Returns False if already present."""
        pass
