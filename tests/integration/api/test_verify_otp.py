from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import AuditEvent, Identity, Role
from tests.utils.factories import PASSWORD


async def _start_challenge(client: AsyncClient, email: str) -> str:
    response = await client.post("/auth/login", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200
    assert response.json()["requires_otp"] is True
    return response.json()["pending_id"]


@pytest.mark.asyncio
async def test_full_otp_flow(client: AsyncClient, create_identity, otp_delivery, db_session):
    """OTP login

    Given a RESIDENT of building A has passed the password step
    When the delivered code is submitted
    Then an access token scoped to building A is returned
    And last_login_at is set
    """
    identity = await create_identity(role=Role.resident, building_id="A", email="r@example.com")
    pending_id = await _start_challenge(client, "r@example.com")

    response = await client.post(
        "/auth/verify-otp", json={"pending_id": pending_id, "code": otp_delivery.last_code}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    assert data["identity"]["building_id"] == "A"

    me = await client.get("/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
    assert me.status_code == 200
    assert me.json()["role"] == "RESIDENT"
    assert me.json()["building_id"] == "A"

    stored = (await db_session.exec(select(Identity).where(Identity.id == identity.id))).one()
    assert stored.last_login_at is not None

    actions = (await db_session.exec(select(AuditEvent.action))).all()
    assert actions == ["otp_challenge_issued", "otp_verified"]


@pytest.mark.asyncio
async def test_code_cannot_be_replayed(client: AsyncClient, create_identity, otp_delivery):
    await create_identity(role=Role.resident, email="r@example.com")
    pending_id = await _start_challenge(client, "r@example.com")
    payload = {"pending_id": pending_id, "code": otp_delivery.last_code}

    first = await client.post("/auth/verify-otp", json=payload)
    second = await client.post("/auth/verify-otp", json=payload)

    assert first.status_code == 200
    assert second.status_code == 401
    assert second.json()["error"]["code"] == "AUTHENTICATION_FAILED"


@pytest.mark.asyncio
async def test_wrong_code_then_lockout(client: AsyncClient, create_identity, otp_delivery):
    await create_identity(role=Role.super_admin, building_id=None, email="root@example.com")
    pending_id = await _start_challenge(client, "root@example.com")
    code = otp_delivery.last_code
    wrong = "0000" if code != "0000" else "1111"

    for _ in range(3):
        response = await client.post(
            "/auth/verify-otp", json={"pending_id": pending_id, "code": wrong}
        )
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_FAILED"

    locked = await client.post("/auth/verify-otp", json={"pending_id": pending_id, "code": code})
    assert locked.status_code == 401


@pytest.mark.asyncio
async def test_unknown_pending_id(client: AsyncClient):
    response = await client.post(
        "/auth/verify-otp", json={"pending_id": str(uuid4()), "code": "1234"}
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTHENTICATION_FAILED"


@pytest.mark.asyncio
async def test_resend_invalidates_previous_challenge(client: AsyncClient, create_identity, otp_delivery):
    await create_identity(role=Role.resident, email="r@example.com")
    first_id = await _start_challenge(client, "r@example.com")
    first_code = otp_delivery.last_code

    resend = await client.post("/auth/resend-otp", json={"pending_id": first_id})

    assert resend.status_code == 200
    second_id = resend.json()["pending_id"]
    assert second_id != first_id

    stale = await client.post("/auth/verify-otp", json={"pending_id": first_id, "code": first_code})
    assert stale.status_code == 401

    fresh = await client.post(
        "/auth/verify-otp", json={"pending_id": second_id, "code": otp_delivery.last_code}
    )
    assert fresh.status_code == 200


@pytest.mark.asyncio
async def test_resend_unknown_challenge(client: AsyncClient):
    response = await client.post("/auth/resend-otp", json={"pending_id": str(uuid4())})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_resend_after_lockout_is_refused(client: AsyncClient, create_identity, otp_delivery):
    await create_identity(role=Role.resident, email="r@example.com")
    pending_id = await _start_challenge(client, "r@example.com")
    wrong = "0000" if otp_delivery.last_code != "0000" else "1111"
    for _ in range(3):
        await client.post("/auth/verify-otp", json={"pending_id": pending_id, "code": wrong})

    resend = await client.post("/auth/resend-otp", json={"pending_id": pending_id})

    assert resend.status_code == 401
    assert resend.json()["error"]["code"] == "AUTHENTICATION_FAILED"
    assert len(otp_delivery.sent) == 1
