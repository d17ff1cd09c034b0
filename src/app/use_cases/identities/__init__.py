"""Identity administration use cases."""

from .register_identity_use_case import RegisterIdentityUseCase
from .disable_identity_use_case import DisableIdentityUseCase
from .dtos import IdentityResponse, RegisterIdentityCommand

__all__ = [
    "RegisterIdentityUseCase",
    "DisableIdentityUseCase",
    "RegisterIdentityCommand",
    "IdentityResponse",
]
