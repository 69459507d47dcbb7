"""Repository for minutes documents and the queries that order them.

Minutes of a series are ordered by date; ties on the same date are
broken by creation time.
"""

import logging

from minutebook.db.turso import TursoClient
from minutebook.models.minutes import MinutesDoc

logger = logging.getLogger(__name__)

_ORDER_ASC = "ORDER BY date ASC, created_at ASC"
_ORDER_DESC = "ORDER BY date DESC, created_at DESC"


class MinutesRepository:
    """Persists minutes as JSON documents with indexed series and date."""

    def __init__(self, db_client: TursoClient):
        """Initialize repository with database client.

        Args:
            db_client: TursoClient instance for database operations
        """
        self._db = db_client

    async def initialize(self) -> None:
        """Create minutes table if not exists."""
        await self._db.execute_batch(
            [
                """
            CREATE TABLE IF NOT EXISTS minutes (
                id TEXT PRIMARY KEY,
                meeting_series_id TEXT NOT NULL,
                date TEXT NOT NULL,
                is_finalized INTEGER NOT NULL DEFAULT 0,
                created_at TEXT NOT NULL,
                doc TEXT NOT NULL
            )
            """,
                """
            CREATE INDEX IF NOT EXISTS idx_minutes_series_date
            ON minutes(meeting_series_id, date)
            """,
            ]
        )

    async def save(self, minutes: MinutesDoc) -> None:
        """Insert or replace a minutes document."""
        minutes.touch()
        await self._db.execute(
            """
            INSERT INTO minutes (id, meeting_series_id, date, is_finalized, created_at, doc)
            VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                meeting_series_id = excluded.meeting_series_id,
                date = excluded.date,
                is_finalized = excluded.is_finalized,
                doc = excluded.doc
            """,
            [
                minutes.id,
                minutes.meeting_series_id,
                minutes.date,
                int(minutes.is_finalized),
                minutes.created_at.isoformat(),
                minutes.model_dump_json(),
            ],
        )
        logger.debug(f"Saved minutes {minutes.id} ({minutes.date})")

    async def get(self, minutes_id: str) -> MinutesDoc | None:
        """Get minutes by id, or None if not found."""
        docs = await self._query("WHERE id = ?", [minutes_id])
        return docs[0] if docs else None

    async def remove(self, minutes_id: str) -> bool:
        """Delete minutes.

        Returns:
            True if a row was deleted
        """
        result = await self._db.execute("DELETE FROM minutes WHERE id = ?", [minutes_id])
        return result.rows_affected > 0

    async def remove_all_of_series(self, series_id: str) -> int:
        """Delete all minutes of a series and return how many were removed."""
        result = await self._db.execute(
            "DELETE FROM minutes WHERE meeting_series_id = ?", [series_id]
        )
        return result.rows_affected

    async def all_minutes_of_series(
        self,
        series_id: str,
        newest_first: bool = False,
        limit: int | None = None,
    ) -> list[MinutesDoc]:
        """All minutes of a series in date order.

        Args:
            series_id: Meeting series id
            newest_first: Reverse the order
            limit: Maximum number of minutes to return
        """
        clause = f"WHERE meeting_series_id = ? {_ORDER_DESC if newest_first else _ORDER_ASC}"
        params: list = [series_id]
        if limit is not None:
            clause += " LIMIT ?"
            params.append(limit)
        return await self._query(clause, params)

    async def last_minutes_of_series(self, series_id: str) -> MinutesDoc | None:
        """The most recent minutes of a series."""
        docs = await self.all_minutes_of_series(series_id, newest_first=True, limit=1)
        return docs[0] if docs else None

    async def first_minutes_of_series(self, series_id: str) -> MinutesDoc | None:
        """The oldest minutes of a series."""
        docs = await self.all_minutes_of_series(series_id, limit=1)
        return docs[0] if docs else None

    async def previous_minutes(self, minutes: MinutesDoc) -> MinutesDoc | None:
        """The minutes of the same series directly before the given one."""
        docs = await self._query(
            f"""WHERE meeting_series_id = ?
                AND (date < ? OR (date = ? AND created_at < ?))
                {_ORDER_DESC} LIMIT 1""",
            [
                minutes.meeting_series_id,
                minutes.date,
                minutes.date,
                minutes.created_at.isoformat(),
            ],
        )
        return docs[0] if docs else None

    async def next_minutes(self, minutes: MinutesDoc) -> MinutesDoc | None:
        """The minutes of the same series directly after the given one."""
        docs = await self._query(
            f"""WHERE meeting_series_id = ?
                AND (date > ? OR (date = ? AND created_at > ?))
                {_ORDER_ASC} LIMIT 1""",
            [
                minutes.meeting_series_id,
                minutes.date,
                minutes.date,
                minutes.created_at.isoformat(),
            ],
        )
        return docs[0] if docs else None

    async def _query(self, clause: str, params: list) -> list[MinutesDoc]:
        result = await self._db.execute(f"SELECT doc FROM minutes {clause}", params)
        return [MinutesDoc.model_validate_json(row[0]) for row in result.rows]
