"""Repository for broadcast messages."""

import logging

from minutebook.db.turso import TursoClient
from minutebook.models.broadcast_message import BroadcastMessageDoc

logger = logging.getLogger(__name__)


class BroadcastRepository:
    """Persists broadcast messages."""

    def __init__(self, db_client: TursoClient):
        """Initialize repository with database client.

        Args:
            db_client: TursoClient instance for database operations
        """
        self._db = db_client

    async def initialize(self) -> None:
        """Create broadcast_messages table if not exists."""
        await self._db.execute(
            """
            CREATE TABLE IF NOT EXISTS broadcast_messages (
                id TEXT PRIMARY KEY,
                is_active INTEGER NOT NULL DEFAULT 1,
                created_at TEXT NOT NULL,
                doc TEXT NOT NULL
            )
            """
        )

    async def save(self, message: BroadcastMessageDoc) -> None:
        """Insert or replace a message."""
        message.touch()
        await self._db.execute(
            """
            INSERT INTO broadcast_messages (id, is_active, created_at, doc)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                is_active = excluded.is_active,
                doc = excluded.doc
            """,
            [
                message.id,
                int(message.is_active),
                message.created_at.isoformat(),
                message.model_dump_json(),
            ],
        )

    async def get(self, message_id: str) -> BroadcastMessageDoc | None:
        """Get a message by id, or None if not found."""
        result = await self._db.execute(
            "SELECT doc FROM broadcast_messages WHERE id = ?", [message_id]
        )
        if not result.rows:
            return None
        return BroadcastMessageDoc.model_validate_json(result.rows[0][0])

    async def list_active(self) -> list[BroadcastMessageDoc]:
        """Active messages, oldest first."""
        result = await self._db.execute(
            "SELECT doc FROM broadcast_messages WHERE is_active = 1 ORDER BY created_at"
        )
        return [BroadcastMessageDoc.model_validate_json(r[0]) for r in result.rows]

    async def list_all(self) -> list[BroadcastMessageDoc]:
        """All messages, oldest first."""
        result = await self._db.execute(
            "SELECT doc FROM broadcast_messages ORDER BY created_at"
        )
        return [BroadcastMessageDoc.model_validate_json(r[0]) for r in result.rows]

    async def remove(self, message_id: str) -> bool:
        """Delete a message.

        Returns:
            True if a row was deleted
        """
        result = await self._db.execute(
            "DELETE FROM broadcast_messages WHERE id = ?", [message_id]
        )
        return result.rows_affected > 0

    async def remove_all(self) -> int:
        """Delete every message and return how many were removed."""
        result = await self._db.execute("DELETE FROM broadcast_messages")
        removed = result.rows_affected
        logger.info(f"Removed {removed} broadcast message(s)")
        return removed
