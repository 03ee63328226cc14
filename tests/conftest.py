"""
Pytest configuration and fixtures
"""

import pytest
import pytest_asyncio
import httpx
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool
from core.database import build_engine, build_session_maker, init_schema
from repositories import SymbiosisRepository
from schemas.records import IndustryCreate, MaterialCreate
from typing import AsyncGenerator

# In-memory database shared by every session of one test
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine with foreign keys enforced"""
    engine = build_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    await init_schema(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for tests"""
    async_session_maker = build_session_maker(test_engine)

    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def repository(db_session) -> SymbiosisRepository:
    return SymbiosisRepository(db_session)


@pytest_asyncio.fixture
async def client(db_session) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client against the app with the database overridden"""
    from api.main import app
    from api.dependencies import get_db

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def acme_steel(repository) -> int:
    """Industry id of a single seeded industry"""
    return await repository.create_industry(
        IndustryCreate(name="Acme Steel", sector="Steel", location="Pittsburgh")
    )


@pytest_asyncio.fixture
async def slag(repository, acme_steel) -> int:
    """Material id owned by ``acme_steel``"""
    return await repository.create_material(
        MaterialCreate(industry_id=acme_steel, name="Blast furnace slag", material_type="Slag", quantity=50)
    )


@pytest.fixture
def industry_payload():
    """Request body for POST /industries"""
    return {
        "name": "Portland Cement Works",
        "sector": "Construction",
        "location": "Lehigh Valley",
        "description": "Clinker and cement production",
        "annual_output": 450000
    }
