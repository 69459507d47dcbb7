"""Tokenizing parser for item and topic search queries.

A query is split on whitespace and every token becomes one of:

- a label token: ``#name``, extended greedily over following tokens
  until the next keyword or ``#`` (multi-word label names),
- a filter token: ``key:value`` accepted by the keyword registry, or
  ``@user``,
- a free-text token: anything else.

Label and user names are resolved to ids through injected callables
that may be synchronous or return awaitables. The tokenizer itself is a
generator that yields resolution requests, so ``parse`` and
``parse_async`` share one implementation.
"""

import inspect
from collections.abc import Awaitable, Callable, Generator
from typing import Any

from minutebook.search.keywords import ME, USER_KEY, KeywordSet
from minutebook.search.schemas import FilterToken, KeywordDef, LabelToken

IdResolver = Callable[[str], list[str] | Awaitable[list[str]]]

_LABEL = "label"
_USER = "user"
_LABEL_PREFIX = "#"

# (kind, name) asked of a resolver; the answer is sent back in.
_Request = tuple[str, str]
_Tokenizer = Generator[_Request, list[str], None]


class QueryParser:
    """Parse a query string into search, filter and label tokens.

    One instance can be reused; ``parse`` resets all state first.
    """

    def __init__(
        self,
        keywords: KeywordSet,
        query_label_ids_by_name: IdResolver | None = None,
        query_user_id_by_name: IdResolver | None = None,
        current_user_id: str | None = None,
    ):
        """Configure the parser.

        Args:
            keywords: Keyword vocabulary (ITEM_KEYWORDS or TOPIC_KEYWORDS)
            query_label_ids_by_name: Resolves a label name to label ids
            query_user_id_by_name: Resolves a user name to user ids
            current_user_id: Id that ``@me`` resolves to without a lookup
        """
        self._keywords = keywords
        self._query_label_ids = query_label_ids_by_name
        self._query_user_ids = query_user_id_by_name
        self._current_user_id = current_user_id
        self.reset()

    def reset(self) -> None:
        """Clear all tokens of the previous query."""
        self._search_tokens: list[str] = []
        self._filter_tokens: list[FilterToken] = []
        self._label_tokens: list[LabelToken] = []

    def parse(self, query: str) -> None:
        """Parse with synchronous resolvers.

        Raises:
            TypeError: If a resolver returns an awaitable; use parse_async
        """
        self.reset()
        tokenizer = self._tokenize(query)
        try:
            request = next(tokenizer)
            while True:
                result = self._call_resolver(request)
                if inspect.isawaitable(result):
                    if inspect.iscoroutine(result):
                        result.close()
                    tokenizer.close()
                    msg = "Resolver returned an awaitable, use parse_async()"
                    raise TypeError(msg)
                request = tokenizer.send(list(result))
        except StopIteration:
            pass

    async def parse_async(self, query: str) -> None:
        """Parse with resolvers that may return awaitables."""
        self.reset()
        tokenizer = self._tokenize(query)
        try:
            request = next(tokenizer)
            while True:
                result = self._call_resolver(request)
                if inspect.isawaitable(result):
                    result = await result
                request = tokenizer.send(list(result))
        except StopIteration:
            pass

    def _call_resolver(self, request: _Request) -> Any:
        kind, name = request
        resolver = self._query_label_ids if kind == _LABEL else self._query_user_ids
        return resolver(name)

    def _is_label_boundary(self, token: str) -> bool:
        return token.startswith(_LABEL_PREFIX) or self._keywords.is_keyword(token)

    def _tokenize(self, query: str) -> _Tokenizer:
        tokens = query.split()
        index = 0
        while index < len(tokens):
            token = tokens[index]
            index += 1

            if token.startswith(_LABEL_PREFIX) and len(token) > len(_LABEL_PREFIX):
                name = token[len(_LABEL_PREFIX):]
                ids: list[str] = []
                if self._query_label_ids is not None:
                    ids = yield (_LABEL, name)
                while index < len(tokens) and not self._is_label_boundary(tokens[index]):
                    candidate = f"{name} {tokens[index]}"
                    if self._query_label_ids is not None:
                        candidate_ids = yield (_LABEL, candidate)
                        if not candidate_ids:
                            break
                        ids = candidate_ids
                    name = candidate
                    index += 1
                self._label_tokens.append(LabelToken(token=name, ids=ids))
                continue

            if self._keywords.is_keyword(token):
                filter_token = self._keywords.get_keyword_from_token(token)
                if filter_token.key == USER_KEY:
                    if filter_token.value == ME and self._current_user_id is not None:
                        filter_token.ids = [self._current_user_id]
                        filter_token.value = ""
                    elif self._query_user_ids is not None:
                        filter_token.ids = yield (_USER, filter_token.value)
                        if filter_token.value == ME:
                            filter_token.value = ""
                self._filter_tokens.append(filter_token)
                continue

            self._search_tokens.append(token)

    def get_search_tokens(self) -> list[str]:
        return list(self._search_tokens)

    def get_filter_tokens(self) -> list[FilterToken]:
        return list(self._filter_tokens)

    def get_label_tokens(self) -> list[LabelToken]:
        return list(self._label_tokens)

    def has_keyword(
        self, key: str | KeywordDef | dict[str, Any], value: str | None = None
    ) -> bool:
        """True if a filter token with this key (and value, if given) was parsed.

        The key may be given as a string, a keyword definition, or a mapping
        with a "key" entry.
        """
        if isinstance(key, KeywordDef):
            key = key.key
        elif isinstance(key, dict):
            key = key["key"]
        key_name = key.lower()
        return any(
            token.key == key_name and (value is None or token.value == value)
            for token in self._filter_tokens
        )

    def is_case_sensitive(self) -> bool:
        return self.has_keyword("do", "match-case")
