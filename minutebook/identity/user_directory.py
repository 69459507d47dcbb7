"""Lookups over the user collection used by queries and rendering."""

from minutebook.models.user import UserDoc
from minutebook.repositories.users_repo import UsersRepository


class UserDirectory:
    """Resolves user names to ids and ids to users."""

    def __init__(self, users_repo: UsersRepository):
        self._users = users_repo

    async def query_user_ids_by_name(self, name: str) -> list[str]:
        """Ids of active users whose username or profile name contains name.

        Case-insensitive. Serves as the user resolver of the query parser.
        """
        needle = name.lower()
        if not needle:
            return []
        return [
            user.id
            for user in await self._users.list_all()
            if not user.is_inactive
            and (
                needle in user.username.lower()
                or needle in str(user.profile.get("name") or "").lower()
            )
        ]

    async def users_by_ids(self, user_ids: list[str]) -> list[UserDoc]:
        return await self._users.list_by_ids(user_ids)

