"""
PendingAuthentication Entity

OTP challenge awaiting verification.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class PendingAuthentication(SQLModel, table=True):
    """
    PendingAuthentication entity - one OTP challenge bound to an identity.

    Business Rules:
    - At most one row per identity (unique identity_id); issuing replaces it
    - Code stored as SHA-256 of "<id>:<code>", never in plain text
    - Expires after OTP_TTL_SECONDS (default 5 minutes)
    - Single-use: consumed flag flips exactly once (atomic update)
    - Locked after OTP_MAX_ATTEMPTS wrong codes
    """

    __tablename__ = "pending_authentications"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    identity_id: UUID = Field(foreign_key="identities.id", nullable=False, unique=True)
    code_hash: str = Field(max_length=64)  # SHA-256 output

    attempts: int = Field(default=0)
    consumed: bool = Field(default=False)
    consumed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (Index("idx_pending_auth_expires_at", "expires_at"),)

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
