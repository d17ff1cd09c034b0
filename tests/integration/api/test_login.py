import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import AuditEvent, IdentityStatus, PendingAuthentication, Role
from tests.utils.factories import PASSWORD


@pytest.mark.asyncio
async def test_security_login_returns_token(client: AsyncClient, create_identity, db_session, otp_delivery):
    """Direct-token role

    Given a SECURITY identity of building A
    When it logs in with the right password
    Then it receives an access token scoped to building A
    And no OTP challenge is created
    """
    identity = await create_identity(role=Role.security, building_id="A", email="guard@example.com")

    response = await client.post("/auth/login", json={"email": "guard@example.com", "password": PASSWORD})

    assert response.status_code == 200
    data = response.json()
    assert data["requires_otp"] is False
    assert data["token_type"] == "bearer"
    assert isinstance(data["access_token"], str) and data["access_token"]
    assert data["pending_id"] is None
    assert data["identity"]["id"] == str(identity.id)
    assert data["identity"]["role"] == "SECURITY"
    assert data["identity"]["building_id"] == "A"

    pending = (await db_session.exec(select(PendingAuthentication))).all()
    assert pending == []
    assert otp_delivery.sent == []

    actions = (await db_session.exec(select(AuditEvent.action))).all()
    assert actions == ["login"]


@pytest.mark.asyncio
async def test_resident_login_requires_otp(client: AsyncClient, create_identity, db_session, otp_delivery):
    """OTP role

    Given a RESIDENT identity
    When it logs in with the right password
    Then it receives a pending id and no token
    And a code is sent through the delivery channel
    """
    identity = await create_identity(role=Role.resident, email="resident@example.com")

    response = await client.post(
        "/auth/login", json={"identifier": "resident@example.com", "password": PASSWORD}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["requires_otp"] is True
    assert data["pending_id"]
    assert data["otp_expires_at"]
    assert data["access_token"] is None

    pending = (await db_session.exec(select(PendingAuthentication))).one()
    assert str(pending.id) == data["pending_id"]
    assert pending.identity_id == identity.id
    assert len(otp_delivery.sent) == 1
    assert otp_delivery.last_code not in pending.code_hash


@pytest.mark.asyncio
async def test_login_by_phone_and_username(client: AsyncClient, create_identity):
    await create_identity(
        role=Role.building_admin,
        building_id="A",
        email="admin@example.com",
        phone="+15550100100",
        username="admin-a",
    )

    by_phone = await client.post(
        "/auth/login", json={"phone": "+1 555 010 0100", "password": PASSWORD}
    )
    by_username = await client.post(
        "/auth/login", json={"identifier": "admin-a", "password": PASSWORD}
    )

    assert by_phone.status_code == 200
    assert by_phone.json()["requires_otp"] is False
    assert by_username.status_code == 200
    assert by_username.json()["requires_otp"] is False


@pytest.mark.asyncio
async def test_login_failures_are_uniform(client: AsyncClient, create_identity):
    """Wrong password, unknown identifier and disabled identity look the same"""
    await create_identity(role=Role.security, building_id="A", email="guard@example.com")
    await create_identity(
        role=Role.security,
        building_id="A",
        email="gone@example.com",
        status=IdentityStatus.disabled,
    )

    responses = [
        await client.post("/auth/login", json={"email": "guard@example.com", "password": "WrongPassword!"}),
        await client.post("/auth/login", json={"email": "nobody@example.com", "password": PASSWORD}),
        await client.post("/auth/login", json={"email": "gone@example.com", "password": PASSWORD}),
    ]

    for response in responses:
        assert response.status_code == 401
        assert response.json() == {
            "error": {"code": "AUTHENTICATION_FAILED", "message": "Authentication failed"}
        }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"password": PASSWORD},
        {"email": "a@example.com", "username": "a", "password": PASSWORD},
        {"identifier": "   ", "password": PASSWORD},
        {"email": "a@example.com"},
    ],
)
async def test_login_rejects_malformed_payload(client: AsyncClient, payload):
    response = await client.post("/auth/login", json=payload)

    assert response.status_code == 422
