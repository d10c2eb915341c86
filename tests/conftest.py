import os

# Settings are read at import time, so the environment is prepared first.
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test_warehouse.db"
os.environ["SEED_ADMIN_ON_STARTUP"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config import settings
from app.database import build_engine, get_db, init_db
from app.database_init import seed_default_admin
from app.main import app


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'warehouse.db'}")
    await init_db(bind=engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


async def login(client: AsyncClient, username: str, password: str, remember_me: bool = False) -> dict:
    """Sign in and return Bearer headers. Cookies are dropped so callers stay explicit."""
    response = await client.post(
        "/api/auth/login",
        json={"username": username, "password": password, "remember_me": remember_me},
    )
    assert response.status_code == 200, response.text
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
async def admin_headers(client, session_factory):
    async with session_factory() as session:
        await seed_default_admin(session)
    return await login(client, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)


@pytest.fixture
def item_payload():
    def _make(sku="ITEM-1001", **overrides):
        payload = {
            "sku": sku,
            "name": "Standard Box",
            "category": "Packaging",
            "quantity": 100,
            "location": "Shelf A1",
            "condition": "New",
        }
        payload.update(overrides)
        return payload
    return _make
