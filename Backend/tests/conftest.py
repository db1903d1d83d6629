import pytest
from datetime import datetime
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.pool import StaticPool
from tournament_api.core.config import get_settings
from tournament_api.core.database import Base, get_db
from tournament_api.main import app
from tournament_api.models.game import Game
from tournament_api.models.tournament import Tournament

# In-memory SQLite for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixture to create the database engine and setup/teardown tables for each test
@pytest.fixture(scope="function")
async def db_engine():
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()

# Fixture to provide a database session for each test, with transaction rollback for isolation
@pytest.fixture(scope="function")
async def db_session(db_engine):
    connection = await db_engine.connect()
    # Start a transaction for test isolation
    transaction = await connection.begin()

    # Create a new session bound to the connection
    session = AsyncSession(bind=connection, expire_on_commit=False)

    yield session

    # Rollback transaction and close session after test
    await session.close()
    await transaction.rollback()
    await connection.close()


@pytest.fixture(scope="function", autouse=True)
def settings_cache():
    # Tests that monkeypatch the environment need a fresh Settings object
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture(scope="function")
def setup_app_dependencies(db_session):

    # Override get_db dependency so that it uses the test database session
    async def override_get_db():
        yield db_session
    app.dependency_overrides[get_db] = override_get_db

    yield

    # Cleanup after test
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def client(setup_app_dependencies):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture(scope="function")
def make_tournament(db_session):
    """Insert a tournament directly, bypassing the API."""
    async def _make(title: str = "Test Cup", start_date: datetime = datetime(2026, 1, 1, 10, 0), games=()) -> Tournament:
        tournament = Tournament(title=title, start_date=start_date)
        db_session.add(tournament)
        await db_session.flush()
        for game_title, game_time in games:
            db_session.add(Game(title=game_title, time=game_time, tournament_id=tournament.id))
        await db_session.flush()
        return tournament
    return _make
