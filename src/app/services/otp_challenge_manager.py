"""
OTP Challenge Manager

Issues, stores and verifies short-lived one-time codes bound to an identity.
How the code reaches the person is the delivery channel's business.
"""

import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable
from uuid import UUID

from src.libs.result import Error, Result, Return
from src.app.services.otp_delivery import IOtpDelivery
from src.app.services.session_issuer import SessionIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Identity, PendingAuthentication, Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OtpSettings:
    code_length: int = 4
    ttl: timedelta = timedelta(minutes=5)
    max_attempts: int = 3

    def __post_init__(self):
        if self.code_length < 4:
            raise ValueError("OTP code length must be at least 4 digits")
        if self.ttl <= timedelta(0):
            raise ValueError("OTP lifetime must be positive")
        if self.max_attempts < 1:
            raise ValueError("OTP max attempts must be at least 1")


def generate_code(length: int) -> str:
    return f"{secrets.randbelow(10**length):0{length}d}"


def hash_code(pending_id: UUID, code: str) -> str:
    return hashlib.sha256(f"{pending_id}:{code}".encode()).hexdigest()


class OtpChallengeManager:
    """
    OTP challenge lifecycle.

    Business Rules:
    - Codes are numeric, fixed length, from the secrets module
    - At most one challenge per identity: issuing replaces the previous one
    - Expiry checked against the clock at verification time
    - Code comparison is constant-time
    - Consumption is a storage-level compare-and-swap, so exactly one
      concurrent verification of a challenge can succeed
    - Locked after max_attempts wrong codes; replacing a live challenge
      keeps its count, and a locked one keeps its expiry
    """

    def __init__(
        self,
        uow: UnitOfWork,
        delivery: IOtpDelivery,
        session_issuer: SessionIssuer,
        settings: OtpSettings = OtpSettings(),
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.delivery = delivery
        self.session_issuer = session_issuer
        self.settings = settings
        self.clock = clock

    async def issue(self, identity: Identity) -> PendingAuthentication:
        """
        Create a challenge for identity and hand the code to the delivery channel.

        A live challenge being replaced passes its wrong-code count on, so
        neither a resend nor a fresh login resets the lock. The caller owns
        the transaction and commits.
        """
        now = self.clock()
        code = generate_code(self.settings.code_length)

        attempts = 0
        expires_at = now + self.settings.ttl
        current = await self.uow.pending_authentications.get_by_identity_id(identity.id)
        if current is not None and not current.consumed and not current.is_expired(now):
            attempts = current.attempts
            if attempts >= self.settings.max_attempts:
                # A locked challenge stays locked until its own expiry
                expires_at = current.expires_at

        pending = PendingAuthentication(
            identity_id=identity.id,
            code_hash="",
            attempts=attempts,
            created_at=now,
            expires_at=expires_at,
        )
        pending.code_hash = hash_code(pending.id, code)
        pending = await self.uow.pending_authentications.replace_for_identity(pending)

        try:
            await self.delivery.send(identity, code)
        except Exception as exc:
            logger.warning(f"OTP delivery failed for identity {identity.id}: {exc}")

        return pending

    async def verify(self, pending_id: UUID, code: str) -> Result[Session]:
        """
        Verify a submitted code and mint a session on success.

        The caller owns the transaction and commits, also on failure, so
        attempt counters and consumption are persisted.

        Errors:
            - OTP_INVALID: Unknown challenge or wrong code
            - OTP_EXPIRED: Challenge expired
            - OTP_ALREADY_CONSUMED: Challenge already used
            - OTP_ATTEMPTS_EXCEEDED: Too many wrong codes
            - IDENTITY_DISABLED: Identity disabled since the challenge was issued
        """
        pending = await self.uow.pending_authentications.get_by_id(pending_id)
        if pending is None:
            return Return.err(Error("OTP_INVALID", "Invalid one-time code"))

        if pending.consumed:
            return Return.err(
                Error("OTP_ALREADY_CONSUMED", "One-time code has already been used")
            )

        now = self.clock()
        if pending.is_expired(now):
            return Return.err(Error("OTP_EXPIRED", "One-time code has expired"))

        if pending.attempts >= self.settings.max_attempts:
            return Return.err(
                Error("OTP_ATTEMPTS_EXCEEDED", "Too many invalid one-time code attempts")
            )

        if not hmac.compare_digest(hash_code(pending.id, code), pending.code_hash):
            attempts = await self.uow.pending_authentications.record_failed_attempt(
                pending.id
            )
            return Return.err(
                Error("OTP_INVALID", "Invalid one-time code", {"attempts": attempts})
            )

        consumed = await self.uow.pending_authentications.consume(pending.id, now)
        if not consumed:
            return Return.err(
                Error("OTP_ALREADY_CONSUMED", "One-time code has already been used")
            )

        identity = await self.uow.identities.get_by_id(pending.identity_id)
        if identity is None or not identity.is_login_allowed:
            return Return.err(Error("IDENTITY_DISABLED", "Identity is disabled"))

        return Return.ok(self.session_issuer.issue(identity))

    async def resend(self, pending_id: UUID) -> Result[PendingAuthentication]:
        """
        Replace an open challenge with a fresh code for the same identity.

        Only a live challenge can be re-sent.

        Errors:
            - OTP_INVALID: Unknown challenge
            - OTP_ALREADY_CONSUMED: Challenge already used
            - OTP_EXPIRED: Challenge expired; log in again
            - OTP_ATTEMPTS_EXCEEDED: Challenge locked; log in again
            - IDENTITY_DISABLED: Identity disabled since the challenge was issued
        """
        pending = await self.uow.pending_authentications.get_by_id(pending_id)
        if pending is None:
            return Return.err(Error("OTP_INVALID", "Invalid one-time code"))

        if pending.consumed:
            return Return.err(
                Error("OTP_ALREADY_CONSUMED", "One-time code has already been used")
            )

        if pending.is_expired(self.clock()):
            return Return.err(Error("OTP_EXPIRED", "One-time code has expired"))

        if pending.attempts >= self.settings.max_attempts:
            return Return.err(
                Error("OTP_ATTEMPTS_EXCEEDED", "Too many invalid one-time code attempts")
            )

        identity = await self.uow.identities.get_by_id(pending.identity_id)
        if identity is None or not identity.is_login_allowed:
            return Return.err(Error("IDENTITY_DISABLED", "Identity is disabled"))

        return Return.ok(await self.issue(identity))
