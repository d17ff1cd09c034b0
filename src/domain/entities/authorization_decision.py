"""
AuthorizationDecision Value Object

Per-request result of the building authorization guard. Never persisted.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from .enums import AuthorizationEffect, Role


class AuthorizationDecision(BaseModel):
    effect: AuthorizationEffect = AuthorizationEffect.allow
    identity_id: UUID
    role: Role
    building_id: str
    session_building_id: Optional[str] = None
