"""
AuditEvent Entity

Immutable log of all authentication/authorization events.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utcnow


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - immutable log of all authentication/authorization events.

    Business Rules:
    - Immutable (never updated or deleted)
    - building_id nullable for platform-wide events (super admin login, etc.)
    - Metadata never contains secrets or OTP codes
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    identity_id: Optional[UUID] = Field(default=None, index=True)
    building_id: Optional[str] = Field(default=None, index=True, max_length=64)

    action: str = Field(max_length=100)  # e.g., "login", "otp_verified"
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_building_action", "building_id", "action"),
    )
