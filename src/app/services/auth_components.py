from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from src.app.services.authorization_guard import AuthorizationGuard
from src.app.services.credential_validator import CredentialValidator
from src.app.services.otp_challenge_manager import OtpChallengeManager, OtpSettings
from src.app.services.otp_delivery import IOtpDelivery
from src.app.services.role_policy import RolePolicy
from src.app.services.session_issuer import SessionIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow


@dataclass(frozen=True)
class AuthComponents:
    """
    Process-wide authentication collaborators.

    Built once at startup and handed by reference to every request;
    per-request services are bound to that request's unit of work.
    """

    role_policy: RolePolicy
    session_issuer: SessionIssuer
    otp_delivery: IOtpDelivery
    otp_settings: OtpSettings
    clock: Callable[[], datetime] = utcnow

    def credential_validator(self, uow: UnitOfWork) -> CredentialValidator:
        return CredentialValidator(uow)

    def otp_manager(self, uow: UnitOfWork) -> OtpChallengeManager:
        return OtpChallengeManager(
            uow,
            self.otp_delivery,
            self.session_issuer,
            settings=self.otp_settings,
            clock=self.clock,
        )

    def guard(self, uow: UnitOfWork) -> AuthorizationGuard:
        return AuthorizationGuard(uow, self.session_issuer, clock=self.clock)
