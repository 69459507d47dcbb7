"""Pytest configuration and fixtures."""

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from minutebook.aggregates.session import AggregateSession
from minutebook.db.turso import TursoClient
from minutebook.main import app, init_app_state
from minutebook.repositories.broadcast_repo import BroadcastRepository
from minutebook.repositories.meeting_series_repo import MeetingSeriesRepository
from minutebook.repositories.minutes_repo import MinutesRepository
from minutebook.repositories.topics_repo import TopicsRepository
from minutebook.repositories.users_repo import UsersRepository


@pytest.fixture
async def db_client(tmp_path: Path) -> AsyncIterator[TursoClient]:
    """Create a temp file database client for testing."""
    db_path = tmp_path / "test_minutebook.db"
    client = TursoClient(url=f"file:{db_path}")
    await client.connect()
    yield client
    await client.close()


@pytest.fixture
async def series_repo(db_client: TursoClient) -> MeetingSeriesRepository:
    repo = MeetingSeriesRepository(db_client)
    await repo.initialize()
    return repo


@pytest.fixture
async def minutes_repo(db_client: TursoClient) -> MinutesRepository:
    repo = MinutesRepository(db_client)
    await repo.initialize()
    return repo


@pytest.fixture
async def topics_repo(db_client: TursoClient) -> TopicsRepository:
    repo = TopicsRepository(db_client)
    await repo.initialize()
    return repo


@pytest.fixture
async def users_repo(db_client: TursoClient) -> UsersRepository:
    repo = UsersRepository(db_client)
    await repo.initialize()
    return repo


@pytest.fixture
async def broadcast_repo(db_client: TursoClient) -> BroadcastRepository:
    repo = BroadcastRepository(db_client)
    await repo.initialize()
    return repo


@pytest.fixture
def session(
    series_repo: MeetingSeriesRepository,
    minutes_repo: MinutesRepository,
    topics_repo: TopicsRepository,
) -> AggregateSession:
    """Fresh identity map over the test repositories."""
    return AggregateSession(series_repo, minutes_repo, topics_repo)


@pytest.fixture
async def client(tmp_path: Path) -> AsyncIterator[AsyncClient]:
    """Create async test client for FastAPI app with database."""
    db_path = tmp_path / "test_api.db"
    db = TursoClient(url=f"file:{db_path}")
    await db.connect()
    await init_app_state(app, db)

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test", headers={"X-User-Id": "user-1"}
    ) as ac:
        yield ac

    await db.close()
    app.state.is_moderator = None
