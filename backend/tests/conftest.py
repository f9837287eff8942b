from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import coverwise.models  # noqa: F401
from coverwise.database import Base, get_db
from coverwise.error_handlers import register_exception_handlers
from coverwise.routers import auth, health, recommendations
from coverwise.services.recommendation.domain import RiskTolerance, UserProfile


@pytest.fixture()
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
def app(session_factory) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(health.router, tags=["health"])
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(recommendations.router, prefix="/api", tags=["recommendations"])

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def register(client):
    """Register a user and return bearer headers for them."""

    async def _register(email: str = "alice@example.com", password: str = "secret123", name: str = "Alice"):
        resp = await client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "name": name},
        )
        assert resp.status_code == 201, resp.text
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    return _register


@pytest.fixture()
async def auth_headers(register):
    return await register()


@pytest.fixture()
def make_profile():
    def _make(age: int = 35, income: int = 75_000, dependents: int = 2, risk: str = "medium") -> UserProfile:
        return UserProfile(age=age, income=income, dependents=dependents, risk_tolerance=RiskTolerance(risk))

    return _make
