"""
Use Cases

Use cases are organized into domain folders:
- auth/: Login, OTP verification, logout
- identities/: Identity administration

Import from subdirectories for better organization.
"""

from .auth import (
    LoginUseCase,
    VerifyOtpUseCase,
    ResendOtpUseCase,
    LogoutUseCase,
)
from .identities import (
    RegisterIdentityUseCase,
    DisableIdentityUseCase,
)

__all__ = [
    # Auth
    "LoginUseCase",
    "VerifyOtpUseCase",
    "ResendOtpUseCase",
    "LogoutUseCase",
    # Identities
    "RegisterIdentityUseCase",
    "DisableIdentityUseCase",
]
