import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import RevokedToken, Role


@pytest.mark.asyncio
async def test_logout_revokes_token(client: AsyncClient, create_identity, login, db_session):
    """Logout

    Given a valid session
    When it logs out
    Then the token id is in the revocation set
    And the same token is rejected afterwards
    """
    guard = await create_identity(role=Role.security, building_id="A", email="guard@example.com")
    token = await login(guard)
    headers = {"Authorization": f"Bearer {token}"}

    response = await client.post("/auth/logout", headers=headers)

    assert response.status_code == 200
    assert response.json() == {"status": "success", "message": "Logged out"}

    revoked = (await db_session.exec(select(RevokedToken))).all()
    assert len(revoked) == 1
    assert revoked[0].identity_id == guard.id

    again = await client.get("/buildings/A/access", headers=headers)
    assert again.status_code == 401
    assert again.json()["error"]["code"] == "SESSION_INVALID"

    me = await client.get("/auth/me", headers=headers)
    assert me.status_code == 401


@pytest.mark.asyncio
async def test_logout_leaves_other_sessions_alone(client: AsyncClient, create_identity, login):
    guard = await create_identity(role=Role.security, building_id="A", email="guard@example.com")
    first = await login(guard)
    second = await login(guard)

    await client.post("/auth/logout", headers={"Authorization": f"Bearer {first}"})

    response = await client.get("/buildings/A/access", headers={"Authorization": f"Bearer {second}"})
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_logout_requires_token(client: AsyncClient):
    response = await client.post("/auth/logout")

    assert response.status_code == 401
