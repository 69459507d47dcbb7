"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from minutebook.api.errors import register_error_handlers
from minutebook.api.router import api_router
from minutebook.config import settings
from minutebook.db.turso import TursoClient
from minutebook.events.bus import EventBus
from minutebook.events.store import EventStore
from minutebook.events.types import (
    BroadcastMessageShown,
    MeetingSeriesCreated,
    MinutesCreated,
    MinutesFinalized,
    MinutesRemoved,
    MinutesUnfinalized,
    UsersImported,
)
from minutebook.output.renderer import MinutesRenderer
from minutebook.repositories.broadcast_repo import BroadcastRepository
from minutebook.repositories.meeting_series_repo import MeetingSeriesRepository
from minutebook.repositories.minutes_repo import MinutesRepository
from minutebook.repositories.topics_repo import TopicsRepository
from minutebook.repositories.users_repo import UsersRepository
from minutebook.services.broadcast import BroadcastService

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

AUDITED_EVENTS = [
    MeetingSeriesCreated,
    MinutesCreated,
    MinutesRemoved,
    MinutesFinalized,
    MinutesUnfinalized,
    UsersImported,
    BroadcastMessageShown,
]


async def init_app_state(app: FastAPI, db: TursoClient) -> None:
    """Create schemas and wire repositories and services into app state.

    Every published lifecycle event is appended to the event store as
    an audit trail.
    """
    app.state.db = db

    event_store = EventStore(db)
    await event_store.init_schema()
    app.state.event_store = event_store

    event_bus = EventBus()
    for event_type in AUDITED_EVENTS:
        event_bus.subscribe(event_type, event_store.append)
    app.state.event_bus = event_bus
    logger.info(f"Event bus initialized, auditing {len(AUDITED_EVENTS)} event types")

    app.state.series_repo = MeetingSeriesRepository(db)
    app.state.minutes_repo = MinutesRepository(db)
    app.state.topics_repo = TopicsRepository(db)
    app.state.users_repo = UsersRepository(db)
    broadcast_repo = BroadcastRepository(db)
    for repo in (
        app.state.series_repo,
        app.state.minutes_repo,
        app.state.topics_repo,
        app.state.users_repo,
        broadcast_repo,
    ):
        await repo.initialize()
    logger.info("Repositories initialized")

    app.state.broadcast_service = BroadcastService(broadcast_repo, event_bus)
    app.state.renderer = MinutesRenderer()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan management.

    Startup:
    - Initialize database connection
    - Initialize schemas, event bus and services

    Shutdown:
    - Close database connection
    """
    logger.info(f"Starting {settings.app_name}...")

    db = TursoClient()
    await db.connect()
    logger.info(f"Database connected: {db.url}")
    await init_app_state(app, db)

    yield

    logger.info(f"Shutting down {settings.app_name}...")
    await db.close()
    logger.info("Database connection closed")


app = FastAPI(
    title=settings.app_name,
    description="Meeting series, minutes, topics and action items",
    version=settings.app_version,
    lifespan=lifespan,
)

register_error_handlers(app)
app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "minutebook.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
