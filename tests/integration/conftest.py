import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlmodel import SQLModel
from tests.fixtures.json_loader import TestDataLoader
from src.depends import build_engine, build_session_factory, get_session


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Create a file-backed SQLite engine per test (shared by concurrent sessions)"""
    test_db_url = f"sqlite+aiosqlite:///{tmp_path / 'orders_test.db'}"

    engine = build_engine(test_db_url)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(db_session, test_data):
    """Users (admin, buyer, artist) and artworks (two approved, one pending)"""
    db_session.add_all(test_data.users())
    db_session.add_all(test_data.artworks())
    await db_session.commit()
    return db_session


@pytest_asyncio.fixture
async def client(db_session):
    """Create test client with database session override"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    # Use ASGITransport for httpx AsyncClient
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
