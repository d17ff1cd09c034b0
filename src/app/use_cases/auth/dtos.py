"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Identity


# ============================================================================
# Nested Models
# ============================================================================


class IdentityInfo(BaseModel):
    """Identity information in authentication responses"""

    id: str
    role: str
    building_id: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    username: Optional[str] = None

    @classmethod
    def from_identity(cls, identity: Identity) -> "IdentityInfo":
        return cls(
            id=str(identity.id),
            role=identity.role.value,
            building_id=identity.building_id,
            email=identity.email,
            phone=identity.phone,
            username=identity.username,
        )


# ============================================================================
# Response DTOs
# ============================================================================


class LoginResponse(BaseModel):
    """
    Response for login use case.

    Either a token (requires_otp=False) or an OTP challenge handle
    (requires_otp=True), never both.
    """

    requires_otp: bool
    pending_id: Optional[str] = None
    otp_expires_at: Optional[datetime] = None
    access_token: Optional[str] = None
    token_type: Optional[str] = None
    expires_at: Optional[datetime] = None
    identity: Optional[IdentityInfo] = None


class TokenResponse(BaseModel):
    """Response for OTP verification use case"""

    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    identity: IdentityInfo


class LogoutResponse(BaseModel):
    """Response for logout use case"""

    status: str
    message: str


class SessionInfo(BaseModel):
    """Claims of the current session"""

    identity_id: str
    role: str
    building_id: Optional[str] = None
    token_id: str
    issued_at: datetime
    expires_at: datetime
