"""
Authorization Guard

Decides whether a session may act on a building-scoped resource. Session
validity is always established before any role logic runs, with distinct
error codes so callers can tell "re-authenticate" from "not allowed".
"""

import logging
from datetime import datetime
from typing import Callable

from src.libs.result import Error, Result, Return
from src.app.services.session_issuer import SessionIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuthorizationDecision, Role, Session

logger = logging.getLogger(__name__)


class AuthorizationGuard:
    """
    Building-scoped authorization.

    Business Rules:
    - Signature, expiry, revocation and identity status are checked before role logic
    - SUPER_ADMIN may access any building id, known or not
    - Other roles may only access the building in their session scope
    - A session without building scope never gets building access
    """

    def __init__(
        self,
        uow: UnitOfWork,
        session_issuer: SessionIssuer,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.session_issuer = session_issuer
        self.clock = clock

    async def authenticate(self, token: str) -> Result[Session]:
        """
        Turn a bearer token into a live Session.

        Errors:
            - SESSION_INVALID: Bad token, revoked, or identity disabled since issuance
            - SESSION_EXPIRED: Token expired
        """
        result = self.session_issuer.decode(token)
        if result.is_err():
            return result

        session = result.value
        if await self.uow.revoked_tokens.is_revoked(session.token_id):
            return Return.err(Error("SESSION_INVALID", "Session has been revoked"))

        identity = await self.uow.identities.get_by_id(session.identity_id)
        if identity is None or not identity.is_login_allowed:
            logger.info(
                f"Session {session.token_id} rejected: identity {session.identity_id} disabled"
            )
            return Return.err(Error("SESSION_INVALID", "Identity is disabled"))

        return Return.ok(session)

    def authorize(self, session: Session, building_id: str) -> Result[AuthorizationDecision]:
        """
        Decide access of an authenticated session to building_id.

        Errors:
            - SESSION_EXPIRED: Session lapsed since it was authenticated
            - FORBIDDEN: Building outside the session's scope
        """
        if session.is_expired(self.clock()):
            return Return.err(Error("SESSION_EXPIRED", "Session has expired"))

        decision = AuthorizationDecision(
            identity_id=session.identity_id,
            role=session.role,
            building_id=building_id,
            session_building_id=session.building_id,
        )

        if session.role == Role.super_admin:
            return Return.ok(decision)

        if session.building_id is None or session.building_id != building_id:
            logger.info(
                f"Building access denied: identity={session.identity_id} "
                f"role={session.role.value} requested={building_id}"
            )
            return Return.err(
                Error("FORBIDDEN", "Access denied. You can only access your assigned building.")
            )

        return Return.ok(decision)
