"""
Identity Entity

A person (staff or resident) who can authenticate against the platform.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import IdentityStatus, Role


class Identity(SQLModel, table=True):
    """
    Identity entity - a person who can log in with email, phone or username.

    Business Rules:
    - At least one of email/phone/username is set; each is unique when set
    - Password stored as bcrypt hash (cost factor 12)
    - building_id is required for every role except SUPER_ADMIN
    - Never hard-deleted: status=disabled is the only removal
    """

    __tablename__ = "identities"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    role: Role = Field(nullable=False)

    email: Optional[str] = Field(default=None, unique=True, index=True, max_length=255)
    phone: Optional[str] = Field(default=None, unique=True, index=True, max_length=32)
    username: Optional[str] = Field(default=None, unique=True, index=True, max_length=64)

    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    # Building scope (None only for SUPER_ADMIN)
    building_id: Optional[str] = Field(default=None, index=True, max_length=64)

    status: IdentityStatus = Field(default=IdentityStatus.active)
    can_login: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_identity_role_building", "role", "building_id"),)

    @property
    def is_login_allowed(self) -> bool:
        return self.status == IdentityStatus.active and self.can_login
