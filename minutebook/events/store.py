"""Append-only event store using Turso/libSQL.

Keeps an audit trail of workflow events (finalize, unfinalize, minutes
added or removed) per document.
"""

import json
import logging

from minutebook.db.turso import TursoClient
from minutebook.events.base import Event

logger = logging.getLogger(__name__)


class EventStore:
    """Append-only event store using Turso/libSQL.

    Events are never updated or deleted.
    """

    def __init__(self, client: TursoClient):
        """Initialize event store.

        Args:
            client: Database client for persistence
        """
        self.client = client

    async def init_schema(self) -> None:
        """Create the events table if it doesn't exist."""
        await self.client.execute_batch(
            [
                """
            CREATE TABLE IF NOT EXISTS events (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                event_id TEXT UNIQUE NOT NULL,
                event_type TEXT NOT NULL,
                aggregate_id TEXT,
                aggregate_type TEXT,
                event_data TEXT NOT NULL,
                timestamp TEXT NOT NULL
            )
            """,
                """
            CREATE INDEX IF NOT EXISTS idx_events_aggregate
            ON events(aggregate_type, aggregate_id)
            """,
            ]
        )
        logger.info("Event store schema initialized")

    async def append(self, event: Event) -> None:
        """Append an event to the store."""
        store_dict = event.to_store_dict()
        await self.client.execute(
            """INSERT INTO events
               (event_id, event_type, aggregate_id, aggregate_type,
                event_data, timestamp)
               VALUES (?, ?, ?, ?, ?, ?)""",
            [
                store_dict["event_id"],
                store_dict["event_type"],
                store_dict["aggregate_id"],
                store_dict["aggregate_type"],
                json.dumps(store_dict["data"]),
                store_dict["timestamp"],
            ],
        )
        logger.debug(f"Stored event {event.event_type} ({event.event_id})")
