import pytest
from sqlalchemy import update

from coverwise.models.user import User

pytestmark = pytest.mark.integration


async def test_register_returns_token_and_user(client):
    resp = await client.post(
        "/api/auth/register",
        json={"email": "Bob@Example.com", "password": "hunter22", "name": "  Bob  "},
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Registration successful"
    assert body["token"]
    assert body["user"]["email"] == "bob@example.com"
    assert body["user"]["name"] == "Bob"
    assert "password_hash" not in body["user"]


async def test_register_duplicate_email_conflicts(client, register):
    await register(email="carol@example.com")

    resp = await client.post(
        "/api/auth/register",
        json={"email": "CAROL@example.com", "password": "secret123", "name": "Carol"},
    )
    assert resp.status_code == 409
    assert resp.json()["detail"] == "User with this email already exists"


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "not-an-email", "password": "secret123", "name": "Dan"},
        {"email": "dan@example.com", "password": "short", "name": "Dan"},
        {"email": "dan@example.com", "password": "secret123", "name": "D"},
        {"email": "dan@example.com", "password": "secret123"},
    ],
)
async def test_register_rejects_invalid_payload(client, payload):
    resp = await client.post("/api/auth/register", json=payload)
    assert resp.status_code == 422


async def test_login_success(client, register):
    await register()

    resp = await client.post("/api/auth/login", json={"email": "alice@example.com", "password": "secret123"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Login successful"
    assert body["user"]["email"] == "alice@example.com"
    assert body["token"]


async def test_login_wrong_password(client, register):
    await register()

    resp = await client.post("/api/auth/login", json={"email": "alice@example.com", "password": "wrong-pass"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid email or password"


async def test_login_unknown_email(client):
    resp = await client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "secret123"})
    assert resp.status_code == 401


async def test_profile_with_token(client, auth_headers):
    resp = await client.get("/api/auth/profile", headers=auth_headers)

    assert resp.status_code == 200
    user = resp.json()["user"]
    assert user["email"] == "alice@example.com"
    assert user["name"] == "Alice"
    assert user["id"]


async def test_profile_without_token(client):
    resp = await client.get("/api/auth/profile")
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Access token required"


async def test_profile_with_garbage_token(client):
    resp = await client.get("/api/auth/profile", headers={"Authorization": "Bearer not.a.jwt"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid or expired token"


async def test_disabled_account_is_forbidden(client, register, session_factory):
    headers = await register(email="eve@example.com")
    async with session_factory() as session:
        await session.execute(update(User).where(User.email == "eve@example.com").values(is_active=False))
        await session.commit()

    assert (await client.get("/api/auth/profile", headers=headers)).status_code == 403
    resp = await client.post("/api/auth/login", json={"email": "eve@example.com", "password": "secret123"})
    assert resp.status_code == 403
