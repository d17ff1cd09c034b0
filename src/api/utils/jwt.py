from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from src.app.services.token_signer import (
    ITokenSigner,
    SigningUnavailable,
    TokenExpired,
    TokenInvalid,
)

SUPPORTED_ALGORITHMS = ("HS256", "HS384", "HS512")


class JoseTokenSigner(ITokenSigner):
    """
    JWT signing with python-jose (HMAC algorithms)

    The key is loaded once when the application is built. A missing key is a
    configuration error and raises SigningUnavailable immediately.
    """

    def __init__(self, secret: Optional[str], algorithm: str = "HS256"):
        if not secret:
            raise SigningUnavailable("JWT_SECRET is not configured")
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise SigningUnavailable(f"Unsupported JWT algorithm: {algorithm}")
        self._secret = secret
        self.algorithm = algorithm

    def sign(self, claims: Dict[str, Any]) -> str:
        """
        Generate JWT token

        Args:
            claims: Payload (sub, jti, role, building_id, iat, exp, typ)

        Returns:
            JWT token string
        """
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode JWT token

        Raises:
            TokenExpired: exp has passed
            TokenInvalid: signature, algorithm or structure rejected
        """
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_iat": True, "require_jti": True},
            )
        except ExpiredSignatureError as exc:
            raise TokenExpired(str(exc)) from exc
        except JWTError as exc:
            raise TokenInvalid(str(exc)) from exc
