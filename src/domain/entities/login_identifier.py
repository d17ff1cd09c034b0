"""
LoginIdentifier Value Object

Tagged identifier submitted with a password: email, phone, username, or any.
"""

import re
from typing import List, Tuple

from pydantic import BaseModel, ValidationInfo, field_validator

from .enums import IdentifierKind

_PHONE_NOISE = re.compile(r"[\s\-\.\(\)]")


def normalize_email(value: str) -> str:
    return value.strip().lower()


def normalize_phone(value: str) -> str:
    return _PHONE_NOISE.sub("", value.strip())


def normalize_username(value: str) -> str:
    return value.strip()


_NORMALIZERS = {
    IdentifierKind.email: normalize_email,
    IdentifierKind.phone: normalize_phone,
    IdentifierKind.username: normalize_username,
}


class LoginIdentifier(BaseModel):
    """
    Login identifier resolved to a single Identity by the identity repository.

    kind=any matches whichever of email, phone or username is populated on
    an identity. Values of a concrete kind are normalized on construction;
    an any-identifier is normalized per field in candidates().
    """

    model_config = {"frozen": True}

    kind: IdentifierKind
    value: str

    @field_validator("value")
    @classmethod
    def _normalize(cls, v: str, info: ValidationInfo) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Identifier must not be blank")
        normalizer = _NORMALIZERS.get(info.data.get("kind"))
        return normalizer(v) if normalizer else v

    @classmethod
    def email(cls, value: str) -> "LoginIdentifier":
        return cls(kind=IdentifierKind.email, value=value)

    @classmethod
    def phone(cls, value: str) -> "LoginIdentifier":
        return cls(kind=IdentifierKind.phone, value=value)

    @classmethod
    def username(cls, value: str) -> "LoginIdentifier":
        return cls(kind=IdentifierKind.username, value=value)

    @classmethod
    def any(cls, value: str) -> "LoginIdentifier":
        return cls(kind=IdentifierKind.any, value=value)

    def candidates(self) -> List[Tuple[IdentifierKind, str]]:
        """(field kind, normalized value) pairs a repository must match against."""
        if self.kind != IdentifierKind.any:
            return [(self.kind, self.value)]
        return [(kind, normalize(self.value)) for kind, normalize in _NORMALIZERS.items()]

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.value}"
