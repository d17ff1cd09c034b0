import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_unit_of_work
from src.domain.entities import Role
from tests.utils.factories import PASSWORD, make_identity
from tests.utils.recording_delivery import RecordingOtpDelivery


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def otp_delivery():
    return RecordingOtpDelivery()


@pytest.fixture
def admin_headers():
    from config import ApplicationConfig

    return {"X-Admin-API-Key": ApplicationConfig.ADMIN_API_KEY}


@pytest_asyncio.fixture
async def client(db_session, otp_delivery):
    from config import ApplicationConfig
    from src.api.app import create_app

    app = create_app(ApplicationConfig, otp_delivery=otp_delivery)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def create_identity(db_session):
    """Insert an identity directly; password is tests.utils.factories.PASSWORD"""

    async def _create(role: Role = Role.resident, building_id="building-a", **kwargs):
        identity = make_identity(role=role, building_id=building_id, **kwargs)
        db_session.add(identity)
        await db_session.commit()
        return identity

    return _create


@pytest.fixture
def login(client, otp_delivery):
    """Log in and, for OTP roles, complete the challenge; returns the access token"""

    async def _login(identity) -> str:
        response = await client.post(
            "/auth/login", json={"identifier": identity.email, "password": PASSWORD}
        )
        assert response.status_code == 200, response.text
        data = response.json()
        if not data["requires_otp"]:
            return data["access_token"]

        verify = await client.post(
            "/auth/verify-otp",
            json={"pending_id": data["pending_id"], "code": otp_delivery.last_code},
        )
        assert verify.status_code == 200, verify.text
        return verify.json()["access_token"]

    return _login
