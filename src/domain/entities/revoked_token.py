"""
RevokedToken Entity

Revocation set for access tokens, keyed by token id (JWT jti).
"""

from datetime import datetime
from uuid import UUID

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class RevokedToken(SQLModel, table=True):
    """
    RevokedToken entity - an access token that must no longer be accepted.

    Business Rules:
    - token_id is the JWT jti claim
    - Rows are only useful until expires_at; after that the token is dead anyway
    """

    __tablename__ = "revoked_tokens"

    token_id: str = Field(primary_key=True, max_length=64)
    identity_id: UUID = Field(nullable=False, index=True)

    revoked_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (Index("idx_revoked_token_expires_at", "expires_at"),)
