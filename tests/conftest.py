from datetime import datetime

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from app.main import app
from app.database import Base, get_db, get_public_db
from app.models.equipment import Equipment
from app.models.intervention import Intervention

# Test database URL (SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///./test.db"


@pytest_asyncio.fixture
async def test_db():
    """Create test database and tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=NullPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(test_db: AsyncSession):
    """Create test client with both stores pointed at the test database."""

    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_public_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def registered_equipment(test_db: AsyncSession):
    """Two equipment items stored in the test database."""
    items = [
        Equipment(
            patrimony="AC00001",
            brand="Midea",
            power=12000.0,
            initial_location="Bloco A - Sala 101",
            entry_date=datetime(2023, 6, 1),
        ),
        Equipment(
            patrimony="AC00002",
            brand="LG",
            power=9000.0,
            initial_location="Bloco B - Sala 202",
            entry_date=datetime(2023, 6, 1),
        ),
    ]
    test_db.add_all(items)
    await test_db.commit()
    return items


def make_equipment(**overrides) -> Equipment:
    """Unsaved Equipment instance for pure-function tests."""
    values = {
        "patrimony": "AC00001",
        "brand": "Midea",
        "power": 12000.0,
        "initial_location": "Bloco A - Sala 101",
    }
    values.update(overrides)
    return Equipment(**values)


def make_intervention(**overrides) -> Intervention:
    """Unsaved Intervention instance for pure-function tests."""
    values = {
        "patrimony": "AC00001",
        "type": "manutencao-preventiva",
        "description": "Limpeza de filtros",
        "start_date": datetime(2024, 1, 10, 9, 0),
        "end_date": None,
        "cost": 100.0,
        "responsible": "Carlos",
    }
    values.update(overrides)
    return Intervention(**values)


@pytest.fixture
def equipment_factory():
    return make_equipment


@pytest.fixture
def intervention_factory():
    return make_intervention
