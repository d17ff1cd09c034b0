"""
Token Signing Primitive

Interface for the signing primitive the session issuer relies on, plus the
exceptions it reports. The concrete implementation lives in the adapter layer.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class SigningUnavailable(RuntimeError):
    """No signing key configured. Raised at startup; the service must not run."""


class TokenInvalid(Exception):
    """Token signature, structure or claims are not acceptable."""


class TokenExpired(TokenInvalid):
    """Token was well-formed and correctly signed but its exp has passed."""


class ITokenSigner(ABC):
    @abstractmethod
    def sign(self, claims: Dict[str, Any]) -> str:
        """Return a signed, tamper-evident token carrying claims"""
        pass

    @abstractmethod
    def decode(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a token.

        Raises:
            TokenExpired: exp claim is in the past
            TokenInvalid: anything else wrong with the token
        """
        pass
