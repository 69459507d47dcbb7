"""Repository for user documents."""

import logging

from minutebook.db.turso import TursoClient
from minutebook.models.user import UserDoc

logger = logging.getLogger(__name__)


class UsersRepository:
    """Persists users; usernames are unique."""

    def __init__(self, db_client: TursoClient):
        """Initialize repository with database client.

        Args:
            db_client: TursoClient instance for database operations
        """
        self._db = db_client

    async def initialize(self) -> None:
        """Create users table if not exists."""
        await self._db.execute(
            """
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                username TEXT UNIQUE NOT NULL,
                doc TEXT NOT NULL
            )
            """
        )

    async def save(self, user: UserDoc) -> None:
        """Insert or replace a user by id."""
        await self._db.execute(
            """
            INSERT INTO users (id, username, doc) VALUES (?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                username = excluded.username,
                doc = excluded.doc
            """,
            [user.id, user.username, user.model_dump_json()],
        )

    async def get(self, user_id: str) -> UserDoc | None:
        """Get a user by id, or None if not found."""
        result = await self._db.execute("SELECT doc FROM users WHERE id = ?", [user_id])
        if not result.rows:
            return None
        return UserDoc.model_validate_json(result.rows[0][0])

    async def get_by_username(self, username: str) -> UserDoc | None:
        """Get a user by exact username, or None if not found."""
        result = await self._db.execute(
            "SELECT doc FROM users WHERE username = ?", [username]
        )
        if not result.rows:
            return None
        return UserDoc.model_validate_json(result.rows[0][0])

    async def list_all(self) -> list[UserDoc]:
        """All users ordered by username."""
        result = await self._db.execute("SELECT doc FROM users ORDER BY username")
        return [UserDoc.model_validate_json(row[0]) for row in result.rows]

    async def list_by_ids(self, user_ids: list[str]) -> list[UserDoc]:
        """Users with the given ids, in the order of user_ids."""
        if not user_ids:
            return []
        placeholders = ", ".join("?" for _ in user_ids)
        result = await self._db.execute(
            f"SELECT doc FROM users WHERE id IN ({placeholders})", list(user_ids)
        )
        by_id = {u.id: u for u in (UserDoc.model_validate_json(r[0]) for r in result.rows)}
        return [by_id[uid] for uid in user_ids if uid in by_id]
