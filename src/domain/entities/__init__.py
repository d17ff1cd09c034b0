"""
Building Access Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    AuthorizationEffect,
    IdentifierKind,
    IdentityStatus,
    Role,
)

# Export all entities
from .identity import Identity
from .pending_authentication import PendingAuthentication
from .revoked_token import RevokedToken
from .audit_event import AuditEvent

# Export value objects
from .login_identifier import LoginIdentifier
from .session import Session
from .authorization_decision import AuthorizationDecision

__all__ = [
    # Enums
    "AuthorizationEffect",
    "IdentifierKind",
    "IdentityStatus",
    "Role",
    # Entities
    "Identity",
    "PendingAuthentication",
    "RevokedToken",
    "AuditEvent",
    # Value objects
    "LoginIdentifier",
    "Session",
    "AuthorizationDecision",
]
