import httpx
import pytest
import pytest_asyncio

from user_crud_svc.app import app
from user_crud_svc.config import Settings
from user_crud_svc.models.base import Base, build_engine, build_sessionmaker, get_db


@pytest.fixture
def settings(tmp_path):
    # File-backed SQLite so the engine gets a real bounded pool
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'users.db'}",
    )


@pytest_asyncio.fixture
async def engine(settings):
    engine = build_engine(settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    async with build_sessionmaker(engine)() as session:
        yield session


@pytest_asyncio.fixture
async def client(engine):
    session_factory = build_sessionmaker(engine)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


class FailingSession:
    """Stands in for AsyncSession when every statement fails."""

    def __init__(self, error):
        self.error = error

    async def execute(self, *args, **kwargs):
        raise self.error

    async def commit(self):
        pass


@pytest.fixture
def failing_db():
    """Make get_db hand out a session whose statements raise the given error."""
    def install(error):
        async def override_get_db():
            yield FailingSession(error)

        app.dependency_overrides[get_db] = override_get_db

    return install
