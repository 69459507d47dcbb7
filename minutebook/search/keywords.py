"""Keyword vocabularies for item and topic search queries.

Keys are matched case-insensitively; values are matched exactly against
each keyword's allowed set (or anything for ``"*"``).
"""

from collections.abc import Callable

from minutebook.search.schemas import FilterToken, KeywordDef

USER_KEY = "@"
ME = "me"


class KeywordSet:
    """A registry of keywords plus token classification predicates."""

    def __init__(self, keywords: dict[str, KeywordDef]):
        """Build a registry.

        Args:
            keywords: Keyword definitions by upper-case name (IS, DO, USER, ...)
        """
        self._keywords = keywords

    def __getattr__(self, name: str) -> KeywordDef:
        try:
            return self.__dict__["_keywords"][name]
        except KeyError:
            raise AttributeError(name) from None

    def __contains__(self, name: str) -> bool:
        return name.upper() in self._keywords

    @property
    def definitions(self) -> list[KeywordDef]:
        return list(self._keywords.values())

    def _user_keyword(self) -> KeywordDef | None:
        return self._keywords.get("USER")

    def is_user_token(self, token: str) -> bool:
        user = self._user_keyword()
        return user is not None and token.startswith(user.key) and len(token) > len(user.key)

    def is_keyword(self, token: str) -> bool:
        """True for ``@name`` tokens and for ``key:value`` with an allowed value."""
        if self.is_user_token(token):
            return True
        parts = token.split(":")
        return len(parts) == 2 and self.is_allowed_value_for_key(parts[0], parts[1])

    def is_allowed_value_for_key(self, key: str, value: str) -> bool:
        keyword = self._keywords.get(key.upper())
        if keyword is None or keyword.key == USER_KEY:
            return False
        return keyword.values == "*" or value in keyword.values

    def get_keyword_from_token(
        self,
        token: str,
        query_user_id_by_name: Callable[[str], list[str]] | None = None,
    ) -> FilterToken:
        """Split a keyword token into key and value.

        For ``@name`` tokens the optional resolver supplies user ids and a
        value of ``me`` is blanked once resolved.
        """
        if self.is_user_token(token):
            value = token[len(USER_KEY):]
            ids: list[str] = []
            if query_user_id_by_name is not None:
                ids = list(query_user_id_by_name(value))
                if value == ME:
                    value = ""
            return FilterToken(key=USER_KEY, value=value, ids=ids)
        key, value = token.split(":", 1)
        return FilterToken(key=key.lower(), value=value, ids=[])


_DO = KeywordDef(
    key="do",
    values=["match-case"],
    format="do:<value>",
    description="Specifies how the search will be applied.",
    example='"do:match-case" turns on the case sensitive search.',
)

ITEM_KEYWORDS = KeywordSet(
    {
        "IS": KeywordDef(
            key="is",
            values=["open", "closed", "info", "action", "new", "sticky"],
            format="is:<property>",
            description="Finds items which have the specified property.",
            example='"is:open is:action" finds all open action items.',
        ),
        "DO": _DO,
        "PRIO": KeywordDef(
            key="prio",
            values="*",
            format="prio:<value>",
            description="Finds items which have the given priority.",
            example='"prio:1" finds items with the priority 1',
        ),
        "DUE": KeywordDef(
            key="due",
            values="*",
            format="due:<YYYY-MM-DD>",
            description="Finds action items which are due on the given date.",
            example='"due:2017-07" finds all action items which are due in july of 2017',
        ),
        "USER": KeywordDef(
            key=USER_KEY,
            values="*",
            format="@<username>",
            description="Finds all action items assigned to the given user.",
            example='"@john" finds all action items assigned to the user john',
        ),
    }
)

TOPIC_KEYWORDS = KeywordSet(
    {
        "IS": KeywordDef(
            key="is",
            values=["uncompleted", "completed", "new"],
            format="is:<property>",
            description="Finds topics which have the specified property.",
            example='"is:new is:uncompleted" finds all new uncompleted (open) topics.',
        ),
        "HAS": KeywordDef(
            key="has",
            values=["item", "action", "info"],
            format="has:<type>",
            description="Finds topics which contain items of the specified type.",
            example='"has:action" finds topics which have action items.',
        ),
        "DO": _DO,
        "USER": KeywordDef(
            key=USER_KEY,
            values="*",
            format="@username",
            description="Finds all topics assigned to the given user.",
            example='"@john" finds all topics assigned to the user john',
        ),
    }
)
