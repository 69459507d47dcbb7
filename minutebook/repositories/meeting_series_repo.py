"""Repository for meeting series documents."""

import logging

from minutebook.db.turso import TursoClient
from minutebook.models.meeting_series import MeetingSeriesDoc

logger = logging.getLogger(__name__)


class MeetingSeriesRepository:
    """Persists meeting series as JSON documents.

    Project and name are indexed columns; everything else lives in the
    JSON document.
    """

    def __init__(self, db_client: TursoClient):
        """Initialize repository with database client.

        Args:
            db_client: TursoClient instance for database operations
        """
        self._db = db_client

    async def initialize(self) -> None:
        """Create meeting_series table if not exists."""
        await self._db.execute_batch(
            [
                """
            CREATE TABLE IF NOT EXISTS meeting_series (
                id TEXT PRIMARY KEY,
                project TEXT NOT NULL,
                name TEXT NOT NULL,
                doc TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """,
                """
            CREATE INDEX IF NOT EXISTS idx_series_project
            ON meeting_series(project, name)
            """,
            ]
        )

    async def save(self, series: MeetingSeriesDoc) -> None:
        """Insert or replace a series document.

        Args:
            series: Series to persist; its updated_at is refreshed
        """
        series.touch()
        await self._db.execute(
            """
            INSERT INTO meeting_series (id, project, name, doc, updated_at)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                project = excluded.project,
                name = excluded.name,
                doc = excluded.doc,
                updated_at = excluded.updated_at
            """,
            [
                series.id,
                series.project,
                series.name,
                series.model_dump_json(),
                series.updated_at.isoformat(),
            ],
        )
        logger.debug(f"Saved meeting series {series.id}")

    async def get(self, series_id: str) -> MeetingSeriesDoc | None:
        """Get a series by id.

        Returns:
            The series, or None if not found
        """
        result = await self._db.execute(
            "SELECT doc FROM meeting_series WHERE id = ?",
            [series_id],
        )
        if not result.rows:
            return None
        return MeetingSeriesDoc.model_validate_json(result.rows[0][0])

    async def list_all(self) -> list[MeetingSeriesDoc]:
        """All series ordered by project and name."""
        result = await self._db.execute(
            "SELECT doc FROM meeting_series ORDER BY project, name"
        )
        return [MeetingSeriesDoc.model_validate_json(row[0]) for row in result.rows]

    async def list_visible_for(self, user_id: str) -> list[MeetingSeriesDoc]:
        """Series whose visible_for contains the user."""
        return [s for s in await self.list_all() if user_id in s.visible_for]

    async def remove(self, series_id: str) -> bool:
        """Delete a series.

        Returns:
            True if a row was deleted
        """
        result = await self._db.execute(
            "DELETE FROM meeting_series WHERE id = ?",
            [series_id],
        )
        return result.rows_affected > 0
