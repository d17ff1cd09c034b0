from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.revoked_token_repository import IRevokedTokenRepository
from src.domain.entities import RevokedToken


class RevokedTokenRepository(IRevokedTokenRepository):
    """RevokedToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def is_revoked(self, token_id: str) -> bool:
        """Check whether a token id is in the revocation set"""
        stmt = select(RevokedToken.token_id).where(RevokedToken.token_id == token_id)
        result = await self.session.exec(stmt)
        return result.one_or_none() is not None

    async def add(self, revoked: RevokedToken) -> bool:
        """Add token id to the revocation set"""
        if await self.is_revoked(revoked.token_id):
            return False
        self.session.add(revoked)
        await self.session.flush()
        return True
