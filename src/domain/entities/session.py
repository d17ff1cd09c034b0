"""
Session Value Object

Self-describing access session carried by a signed bearer token.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, model_validator

from .enums import Role


class Session(BaseModel):
    """
    Session - issued by the session issuer, never looked up.

    Business Rules:
    - expires_at > issued_at
    - building_id is a snapshot of the identity's building at issuance time
    - token_id (jti) is the key used by the revocation set
    """

    access_token: str
    token_id: str
    identity_id: UUID
    role: Role
    building_id: Optional[str] = None
    issued_at: datetime
    expires_at: datetime

    @model_validator(mode="after")
    def _check_lifetime(self) -> "Session":
        if self.expires_at <= self.issued_at:
            raise ValueError("Session expires_at must be after issued_at")
        return self

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
