"""
Session Issuer

Mints signed access tokens embedding role and a building-scope snapshot, and
turns presented tokens back into Session objects.
"""

from datetime import UTC, datetime, timedelta
from typing import Callable
from uuid import UUID, uuid4

from src.libs.result import Error, Result, Return
from src.app.services.token_signer import ITokenSigner, TokenExpired, TokenInvalid
from src.domain.base import utcnow
from src.domain.entities import Identity, Role, Session

TOKEN_TYPE = "access"


def _to_timestamp(value: datetime) -> int:
    return int(value.replace(tzinfo=UTC).timestamp())


def _from_timestamp(value: int) -> datetime:
    return datetime.fromtimestamp(value, UTC).replace(tzinfo=None)


class SessionIssuer:
    """
    Issues and decodes access sessions.

    Business Rules:
    - Claims: sub, jti, role, building_id, iat, exp, typ
    - building_id is copied from the identity at issuance time
    - Lifetime is independent of the OTP lifetime
    - Stateless: tokens are verified by signature, never looked up here
    """

    def __init__(
        self,
        signer: ITokenSigner,
        ttl: timedelta,
        clock: Callable[[], datetime] = utcnow,
    ):
        if ttl <= timedelta(0):
            raise ValueError("Session lifetime must be positive")
        self.signer = signer
        self.ttl = ttl
        self.clock = clock

    def issue(self, identity: Identity) -> Session:
        # Whole seconds so the token and the Session agree exactly
        issued_at = self.clock().replace(microsecond=0)
        expires_at = issued_at + self.ttl
        token_id = uuid4().hex

        claims = {
            "sub": str(identity.id),
            "jti": token_id,
            "role": Role(identity.role).value,
            "building_id": identity.building_id,
            "iat": _to_timestamp(issued_at),
            "exp": _to_timestamp(expires_at),
            "typ": TOKEN_TYPE,
        }
        access_token = self.signer.sign(claims)

        return Session(
            access_token=access_token,
            token_id=token_id,
            identity_id=identity.id,
            role=identity.role,
            building_id=identity.building_id,
            issued_at=issued_at,
            expires_at=expires_at,
        )

    def decode(self, token: str) -> Result[Session]:
        """
        Verify a bearer token and rebuild its Session.

        Errors:
            - SESSION_EXPIRED: Signature valid but token expired
            - SESSION_INVALID: Bad signature, shape, type or claims
        """
        try:
            claims = self.signer.decode(token)
        except TokenExpired:
            return Return.err(Error("SESSION_EXPIRED", "Session has expired"))
        except TokenInvalid:
            return Return.err(Error("SESSION_INVALID", "Invalid session token"))

        if claims.get("typ") != TOKEN_TYPE:
            return Return.err(Error("SESSION_INVALID", "Invalid session token"))

        try:
            session = Session(
                access_token=token,
                token_id=claims["jti"],
                identity_id=UUID(claims["sub"]),
                role=Role(claims["role"]),
                building_id=claims.get("building_id"),
                issued_at=_from_timestamp(claims["iat"]),
                expires_at=_from_timestamp(claims["exp"]),
            )
        except (KeyError, TypeError, ValueError):
            return Return.err(Error("SESSION_INVALID", "Invalid session token"))

        return Return.ok(session)
