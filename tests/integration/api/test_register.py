import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.domain.entities import Account


@pytest.mark.asyncio
async def test_successful_registration(client: AsyncClient, db_session: AsyncSession):
    """Register returns 201 with a bearer token and public account fields only"""
    response = await client.post("/auth/register", json={
        "username": "  alice ",
        "email": "Alice@Example.com",
        "password": "password1",
    })

    assert response.status_code == 201
    data = response.json()
    assert data["access_token"]
    assert data["token_type"] == "bearer"
    assert data["account"]["username"] == "alice"
    assert data["account"]["email"] == "alice@example.com"
    assert data["account"]["is_active"] is True
    assert data["account"]["is_verified"] is False
    assert "password" not in response.text
    assert "password_hash" not in data["account"]

    result = await db_session.exec(select(Account).where(Account.email == "alice@example.com"))
    account = result.one()
    assert account.password_hash != "password1"
    assert account.password_changed_at is not None


@pytest.mark.asyncio
async def test_duplicate_email_is_conflict(client: AsyncClient, alice):
    response = await client.post("/auth/register", json={
        "username": "alice_two",
        "email": "ALICE@example.com",
        "password": "password1",
    })

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "DUPLICATE_ACCOUNT"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"username": "al", "email": "alice@example.com", "password": "password1"},
        {"username": "alice!", "email": "alice@example.com", "password": "password1"},
        {"username": "alice", "email": "not-an-email", "password": "password1"},
        {"username": "alice", "email": "alice@example.com", "password": "short"},
        {"username": "alice", "email": "alice@example.com"},
    ],
)
async def test_invalid_registration(client: AsyncClient, payload):
    response = await client.post("/auth/register", json=payload)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
