"""
Test configuration and fixtures.

Provides:
- A fresh SQLite database file per test (tables created up front)
- get_db overridden to use that database
- HTTPX AsyncClient bound to the ASGI app
- User factories (request helpers live in tests/helpers.py)
"""
import os
import tempfile

# Settings are cached on first import, so the environment must be in place first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="socialcare-uploads-")

from typing import AsyncGenerator, Awaitable, Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import socialcare.models  # noqa: F401  registers tables
from socialcare.config import get_settings
from socialcare.database import Base, get_db
from socialcare.main import app
from socialcare.models.user import User
from socialcare.passwords import hash_password

DEFAULT_PASSWORD = "Password123!"


# =============================================================================
# Database
# =============================================================================

@pytest.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker, None]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture(autouse=True)
def upload_dir(tmp_path, monkeypatch) -> str:
    path = tmp_path / "uploads"
    path.mkdir()
    monkeypatch.setattr(get_settings(), "upload_dir", str(path))
    return str(path)


# =============================================================================
# Client
# =============================================================================

@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def make_user(session_factory) -> Callable[..., Awaitable[User]]:
    async def _make_user(
        email: str,
        first_name: str,
        last_name: str,
        role: str = "caregiver",
        password: str = DEFAULT_PASSWORD,
        is_active: bool = True,
    ) -> User:
        async with session_factory() as session:
            user = User(
                email=email,
                password_hash=hash_password(password),
                first_name=first_name,
                last_name=last_name,
                role=role,
                is_active=is_active,
            )
            session.add(user)
            await session.commit()
            return user

    return _make_user


@pytest.fixture
async def caregiver(make_user) -> User:
    return await make_user("john.carer@council.gov.uk", "John", "Carer")


@pytest.fixture
async def other_caregiver(make_user) -> User:
    return await make_user("olivia.other@council.gov.uk", "Olivia", "Other")


@pytest.fixture
async def manager(make_user) -> User:
    return await make_user("jane.manager@council.gov.uk", "Jane", "Manager", role="manager")

