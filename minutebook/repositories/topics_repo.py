"""Repository for the topic ledger of meeting series.

Each ledger entry is one row keyed by (parent_id, id), where parent_id
is the owning meeting series. Entries are returned by sort_order.
"""

import logging

from minutebook.db.turso import TursoClient
from minutebook.models.topic import TopicDoc

logger = logging.getLogger(__name__)

_UPSERT_SQL = """
    INSERT INTO topics (parent_id, id, sort_order, created_in_minute, doc)
    VALUES (?, ?, ?, ?, ?)
    ON CONFLICT(parent_id, id) DO UPDATE SET
        sort_order = excluded.sort_order,
        created_in_minute = excluded.created_in_minute,
        doc = excluded.doc
"""


class TopicsRepository:
    """Persists ledger topics of meeting series."""

    def __init__(self, db_client: TursoClient):
        """Initialize repository with database client.

        Args:
            db_client: TursoClient instance for database operations
        """
        self._db = db_client

    async def initialize(self) -> None:
        """Create topics table if not exists."""
        await self._db.execute_batch(
            [
                """
            CREATE TABLE IF NOT EXISTS topics (
                parent_id TEXT NOT NULL,
                id TEXT NOT NULL,
                sort_order INTEGER NOT NULL DEFAULT 0,
                created_in_minute TEXT,
                doc TEXT NOT NULL,
                PRIMARY KEY (parent_id, id)
            )
            """,
                """
            CREATE INDEX IF NOT EXISTS idx_topics_parent_order
            ON topics(parent_id, sort_order)
            """,
            ]
        )

    @staticmethod
    def _params(series_id: str, topic: TopicDoc) -> list:
        topic.parent_id = series_id
        return [
            series_id,
            topic.id,
            topic.sort_order,
            topic.created_in_minute,
            topic.model_dump_json(),
        ]

    async def upsert(self, series_id: str, topic: TopicDoc) -> None:
        """Insert or replace a ledger entry.

        Args:
            series_id: Owning meeting series
            topic: Topic document; parent_id is set to series_id
        """
        await self._db.execute(_UPSERT_SQL, self._params(series_id, topic))
        logger.debug(f"Upserted topic {topic.id} of series {series_id}")

    async def replace_all(self, series_id: str, topics: list[TopicDoc]) -> None:
        """Replace the whole ledger of a series in one batch.

        Args:
            series_id: Owning meeting series
            topics: New ledger entries
        """
        statements: list = [("DELETE FROM topics WHERE parent_id = ?", [series_id])]
        statements.extend((_UPSERT_SQL, self._params(series_id, t)) for t in topics)
        await self._db.execute_batch(statements)
        logger.info(f"Replaced ledger of series {series_id} with {len(topics)} topic(s)")

    async def get(self, series_id: str, topic_id: str) -> TopicDoc | None:
        """Get one ledger entry, or None if not found."""
        result = await self._db.execute(
            "SELECT doc FROM topics WHERE parent_id = ? AND id = ?",
            [series_id, topic_id],
        )
        if not result.rows:
            return None
        return TopicDoc.model_validate_json(result.rows[0][0])

    async def list_for_series(self, series_id: str) -> list[TopicDoc]:
        """All ledger entries of a series ordered by sort_order."""
        result = await self._db.execute(
            "SELECT doc FROM topics WHERE parent_id = ? ORDER BY sort_order ASC, rowid ASC",
            [series_id],
        )
        return [TopicDoc.model_validate_json(row[0]) for row in result.rows]

    async def remove(self, series_id: str, topic_id: str) -> bool:
        """Delete one ledger entry.

        Returns:
            True if a row was deleted
        """
        result = await self._db.execute(
            "DELETE FROM topics WHERE parent_id = ? AND id = ?",
            [series_id, topic_id],
        )
        return result.rows_affected > 0

    async def remove_all(self, series_id: str) -> None:
        """Delete the whole ledger of a series."""
        await self._db.execute("DELETE FROM topics WHERE parent_id = ?", [series_id])
