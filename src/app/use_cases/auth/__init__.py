"""
Authentication Use Cases

All authentication-related business logic.
"""

from .login_use_case import LoginUseCase
from .verify_otp_use_case import VerifyOtpUseCase
from .resend_otp_use_case import ResendOtpUseCase
from .logout_use_case import LogoutUseCase
from .dtos import (
    IdentityInfo,
    LoginResponse,
    LogoutResponse,
    SessionInfo,
    TokenResponse,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "VerifyOtpUseCase",
    "ResendOtpUseCase",
    "LogoutUseCase",
    # DTOs - Responses
    "LoginResponse",
    "TokenResponse",
    "LogoutResponse",
    "SessionInfo",
    # DTOs - Nested Models
    "IdentityInfo",
]
