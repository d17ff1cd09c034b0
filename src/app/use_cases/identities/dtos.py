"""
Identity Administration DTOs (Data Transfer Objects)

Command/Response pattern for clean architecture separation:
- RegisterIdentityCommand: Input to use case (validated business intent)
- IdentityResponse: Output from use case (structured result)
"""

from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Role


class RegisterIdentityCommand(BaseModel):
    """
    Register identity command - represents validated registration intent

    Created by API layer after request validation passes.
    Contains only business-relevant data (no HTTP concerns).
    """

    role: Role
    password: str
    email: Optional[str] = None
    phone: Optional[str] = None
    username: Optional[str] = None
    building_id: Optional[str] = None


class IdentityResponse(BaseModel):
    """Identity as returned by administration endpoints"""

    id: str
    role: str
    status: str
    can_login: bool
    building_id: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    username: Optional[str] = None
