"""
Pytest configuration and shared fixtures for the loadout API tests.

Provides an in-memory SQLite session, an httpx client bound to the ASGI app
(with get_db overridden to that session), and signed access tokens for a
couple of test players.
"""
import os, sys
sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

import pytest
import pytest_asyncio
from typing import AsyncGenerator

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from database import Base, get_db
from config import settings
from middleware.rate_limit import limiter

# ── Test Configuration ───────────────────────────────────────────────
# Set test-only values for settings that would normally come from .env
if not settings.jwt_secret:
    settings.jwt_secret = "test-jwt-secret-for-pytest-only"
settings.dev_login_enabled = True

STEAM_ID_1 = "76561198000000001"
STEAM_ID_2 = "76561198000000002"
INVALID_STEAM_ID_SHORT = "7656119800000"


# ── Database Fixtures ────────────────────────────────────────────────


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Create an in-memory SQLite database session for each test.

    Uses StaticPool to allow in-memory SQLite with async SQLAlchemy.
    """
    import db_models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session_maker() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client against the ASGI app with the in-memory database.

    Overrides get_db dependency to use test DB session.
    """
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Every test starts with an empty rate-limit window."""
    limiter.reset()
    yield
    limiter.reset()


# ── Auth Fixtures ────────────────────────────────────────────────────


@pytest.fixture
def steam_id() -> str:
    return STEAM_ID_1


@pytest.fixture
def auth_headers(steam_id: str) -> dict:
    """Bearer header for STEAM_ID_1."""
    from middleware.auth import issue_access_token
    token = issue_access_token(steam_id=steam_id, persona_name="tester")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers() -> dict:
    """Bearer header for a second player (STEAM_ID_2)."""
    from middleware.auth import issue_access_token
    return {"Authorization": f"Bearer {issue_access_token(steam_id=STEAM_ID_2)}"}


# ── Test Data Fixtures ────────────────────────────────────────────────


@pytest.fixture
def sample_sticker() -> dict:
    return {"id": 4719, "schema": 0, "x": 0.25, "y": 0.5, "wear": 0.1, "scale": 1, "rotation": 45}


@pytest.fixture
def sample_keychain() -> dict:
    return {"id": 12, "x": 1.5, "y": -0.5, "z": 0, "seed": 77}


@pytest.fixture
def sample_weapon_payload(sample_sticker: dict, sample_keychain: dict) -> dict:
    """Full PUT /api/player/weapons body in the front end's camelCase."""
    return {
        "paintId": 44,
        "wear": 0.15,
        "seed": 321,
        "nametag": "Ace of Spades",
        "stattrak": True,
        "stattrakCount": 1337,
        "stickers": [sample_sticker],
        "keychain": sample_keychain,
    }
