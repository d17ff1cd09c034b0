"""
Building Access Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class Role(str, Enum):
    """Role of an identity across the building management platform"""

    super_admin = "SUPER_ADMIN"
    building_admin = "BUILDING_ADMIN"
    security = "SECURITY"
    resident = "RESIDENT"


class IdentityStatus(str, Enum):
    """Identity account status (soft-disable only, never deleted)"""

    active = "active"
    disabled = "disabled"


class IdentifierKind(str, Enum):
    """Kind of login identifier submitted with a password"""

    email = "email"
    phone = "phone"
    username = "username"
    any = "any"


class AuthorizationEffect(str, Enum):
    """Outcome of a building authorization check"""

    allow = "ALLOW"
