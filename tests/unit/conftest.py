from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from src.adapter.memory import InMemoryStore, InMemoryUnitOfWork
from src.api.utils.jwt import JoseTokenSigner
from src.app.services.auth_components import AuthComponents
from src.app.services.otp_challenge_manager import OtpSettings
from src.app.services.role_policy import RolePolicy
from src.app.services.session_issuer import SessionIssuer
from src.domain.base import utcnow
from tests.utils.clock import FrozenClock
from tests.utils.factories import UNIT_SECRET
from tests.utils.recording_delivery import RecordingOtpDelivery



@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.identities = MagicMock()
    uow.identities.get_by_id = AsyncMock()
    uow.identities.find_by_identifier = AsyncMock(return_value=[])
    uow.identities.create = AsyncMock(side_effect=lambda identity: identity)
    uow.identities.update = AsyncMock(side_effect=lambda identity: identity)

    uow.pending_authentications = MagicMock()
    uow.pending_authentications.get_by_id = AsyncMock()
    uow.pending_authentications.get_by_identity_id = AsyncMock(return_value=None)
    uow.pending_authentications.replace_for_identity = AsyncMock(side_effect=lambda p: p)
    uow.pending_authentications.consume = AsyncMock(return_value=True)
    uow.pending_authentications.record_failed_attempt = AsyncMock(return_value=1)

    uow.revoked_tokens = MagicMock()
    uow.revoked_tokens.is_revoked = AsyncMock(return_value=False)
    uow.revoked_tokens.add = AsyncMock(return_value=True)

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock()

    return uow


@pytest.fixture
def clock():
    return FrozenClock(utcnow().replace(microsecond=0))


@pytest.fixture
def signer():
    return JoseTokenSigner(UNIT_SECRET)


@pytest.fixture
def session_issuer(signer, clock):
    return SessionIssuer(signer, ttl=timedelta(days=7), clock=clock)


@pytest.fixture
def otp_delivery():
    return RecordingOtpDelivery()


@pytest.fixture
def components(session_issuer, otp_delivery, clock):
    return AuthComponents(
        role_policy=RolePolicy(),
        session_issuer=session_issuer,
        otp_delivery=otp_delivery,
        otp_settings=OtpSettings(),
        clock=clock,
    )


@pytest.fixture
def store():
    return InMemoryStore()


@pytest_asyncio.fixture
async def memory_uow(store):
    """Entered InMemoryUnitOfWork so repositories are bound"""
    uow = InMemoryUnitOfWork(store)
    async with uow:
        yield uow
