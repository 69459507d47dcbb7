"""Tests for the search query parser."""

import pytest

from minutebook.search.keywords import ITEM_KEYWORDS, TOPIC_KEYWORDS
from minutebook.search.query_parser import QueryParser

LABELS = {
    "urgent": ["l-urgent"],
    "my": ["l-my"],
    "my label": ["l-mylabel"],
    "needs review": ["l-review"],
    "needs": ["l-needs"],
}
USERS = {"jane": ["u-jane"], "john": ["u-john", "u-johnny"]}


def label_ids(name: str) -> list[str]:
    return LABELS.get(name.lower(), [])


def user_ids(name: str) -> list[str]:
    return USERS.get(name.lower(), [])


class TestTokenizing:
    """Tests for splitting queries into token kinds."""

    def test_mixed_query_without_resolvers(self) -> None:
        """Free text, one keyword and a greedy multi-word label."""
        parser = QueryParser(ITEM_KEYWORDS)
        parser.parse("hello is:open world #my label")

        assert parser.get_search_tokens() == ["hello", "world"]
        filters = parser.get_filter_tokens()
        assert [(f.key, f.value, f.ids) for f in filters] == [("is", "open", [])]
        labels = parser.get_label_tokens()
        assert [(label.token, label.ids) for label in labels] == [("my label", [])]

    def test_empty_query(self) -> None:
        parser = QueryParser(ITEM_KEYWORDS)
        parser.parse("   ")
        assert parser.get_search_tokens() == []
        assert parser.get_filter_tokens() == []
        assert parser.get_label_tokens() == []

    def test_unknown_keyword_is_free_text(self) -> None:
        parser = QueryParser(ITEM_KEYWORDS)
        parser.parse("is:maybe")
        assert parser.get_search_tokens() == ["is:maybe"]
        assert parser.get_filter_tokens() == []

    def test_bare_prefixes_are_free_text(self) -> None:
        """A lone '@' or '#' is not a user or label token."""
        parser = QueryParser(ITEM_KEYWORDS)
        parser.parse("@ #")
        assert parser.get_search_tokens() == ["@", "#"]
        assert parser.get_label_tokens() == []

    def test_label_stops_at_keyword_and_next_label(self) -> None:
        parser = QueryParser(ITEM_KEYWORDS)
        parser.parse("#needs review is:open #urgent")
        assert [label.token for label in parser.get_label_tokens()] == [
            "needs review",
            "urgent",
        ]
        assert parser.has_keyword("is", "open")

    def test_parse_resets_previous_state(self) -> None:
        parser = QueryParser(ITEM_KEYWORDS)
        parser.parse("first is:open")
        parser.parse("second")
        assert parser.get_search_tokens() == ["second"]
        assert parser.get_filter_tokens() == []

    def test_topic_keywords(self) -> None:
        parser = QueryParser(TOPIC_KEYWORDS)
        parser.parse("has:action is:open")
        assert parser.has_keyword("has", "action")
        assert parser.get_search_tokens() == ["is:open"]


class TestResolvers:
    """Tests for label and user name resolution."""

    def test_label_extension_follows_resolver(self) -> None:
        """The label grows only while the longer name still resolves."""
        parser = QueryParser(ITEM_KEYWORDS, query_label_ids_by_name=label_ids)
        parser.parse("#my label budget")

        labels = parser.get_label_tokens()
        assert [(label.token, label.ids) for label in labels] == [("my label", ["l-mylabel"])]
        assert parser.get_search_tokens() == ["budget"]

    def test_label_extension_stops_immediately(self) -> None:
        parser = QueryParser(ITEM_KEYWORDS, query_label_ids_by_name=label_ids)
        parser.parse("#urgent stuff")
        assert [(label.token, label.ids) for label in parser.get_label_tokens()] == [
            ("urgent", ["l-urgent"])
        ]
        assert parser.get_search_tokens() == ["stuff"]

    def test_user_resolution(self) -> None:
        parser = QueryParser(ITEM_KEYWORDS, query_user_id_by_name=user_ids)
        parser.parse("@john")
        (token,) = parser.get_filter_tokens()
        assert token.key == "@"
        assert token.value == "john"
        assert token.ids == ["u-john", "u-johnny"]

    def test_me_uses_current_user(self) -> None:
        """@me resolves to the current user without asking the resolver."""
        calls: list[str] = []

        def resolver(name: str) -> list[str]:
            calls.append(name)
            return []

        parser = QueryParser(
            ITEM_KEYWORDS, query_user_id_by_name=resolver, current_user_id="u-me"
        )
        parser.parse("@me")
        (token,) = parser.get_filter_tokens()
        assert token.ids == ["u-me"]
        assert token.value == ""
        assert calls == []

    def test_async_resolver_requires_parse_async(self) -> None:
        async def resolver(name: str) -> list[str]:
            return ["x"]

        parser = QueryParser(ITEM_KEYWORDS, query_label_ids_by_name=resolver)
        with pytest.raises(TypeError, match="parse_async"):
            parser.parse("#urgent")

    async def test_parse_async_with_async_resolvers(self) -> None:
        async def async_labels(name: str) -> list[str]:
            return label_ids(name)

        async def async_users(name: str) -> list[str]:
            return user_ids(name)

        parser = QueryParser(
            ITEM_KEYWORDS,
            query_label_ids_by_name=async_labels,
            query_user_id_by_name=async_users,
        )
        await parser.parse_async("@jane #needs review report")

        assert parser.get_filter_tokens()[0].ids == ["u-jane"]
        assert parser.get_label_tokens()[0].token == "needs review"
        assert parser.get_label_tokens()[0].ids == ["l-review"]
        assert parser.get_search_tokens() == ["report"]

    async def test_parse_async_accepts_sync_resolvers(self) -> None:
        parser = QueryParser(ITEM_KEYWORDS, query_label_ids_by_name=label_ids)
        await parser.parse_async("#urgent")
        assert parser.get_label_tokens()[0].ids == ["l-urgent"]


class TestKeywordQueries:
    """Tests for has_keyword and case sensitivity."""

    def test_has_keyword_forms(self) -> None:
        parser = QueryParser(ITEM_KEYWORDS)
        parser.parse("IS:action prio:1")
        assert parser.has_keyword("is")
        assert parser.has_keyword("IS", "action")
        assert parser.has_keyword(ITEM_KEYWORDS.PRIO, "1")
        assert parser.has_keyword({"key": "prio"})
        assert not parser.has_keyword("is", "open")
        assert not parser.has_keyword("due")

    def test_case_sensitivity_flag(self) -> None:
        parser = QueryParser(ITEM_KEYWORDS)
        parser.parse("Budget")
        assert not parser.is_case_sensitive()
        parser.parse("Budget do:match-case")
        assert parser.is_case_sensitive()
