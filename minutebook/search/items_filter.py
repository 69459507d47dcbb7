"""Apply a parsed query to item and topic documents.

A document matches iff every filter token matches, every label token's
ids intersect the document's labels, and at least one free-text token is
a substring of a searchable text (or there are no free-text tokens).
Filtering preserves order and never mutates its input.
"""

from collections.abc import Callable, Iterable, Sequence
from typing import Generic, TypeVar

from minutebook.models.base import is_generated_id
from minutebook.models.topic import InfoItemDoc, TopicDoc
from minutebook.search.keywords import USER_KEY
from minutebook.search.query_parser import QueryParser
from minutebook.search.schemas import FilterToken, LabelToken

D = TypeVar("D", InfoItemDoc, TopicDoc)


def _responsibles_match(token: FilterToken, responsibles: Iterable[str]) -> bool:
    responsibles = list(responsibles)
    if token.ids:
        return any(r in token.ids for r in responsibles)
    if token.value:
        # Unresolved names only match free-text responsibles, never user ids.
        return any(token.value in r for r in responsibles if not is_generated_id(r))
    return False


class _DocumentFilter(Generic[D]):
    """Shared matching of labels and free text."""

    def filter(self, docs: Sequence[D], parser: QueryParser) -> list[D]:
        """Return the documents matching the parsed query.

        Args:
            docs: Documents to filter
            parser: Parser holding the tokens of the query

        Returns:
            Matching documents in their original order
        """
        case_sensitive = parser.is_case_sensitive()
        search_tokens = parser.get_search_tokens()
        if not case_sensitive:
            search_tokens = [t.lower() for t in search_tokens]
        filter_tokens = parser.get_filter_tokens()
        label_tokens = parser.get_label_tokens()
        return [
            doc
            for doc in docs
            if self._matches_filters(doc, filter_tokens)
            and self._matches_labels(doc, label_tokens)
            and self._matches_search(doc, search_tokens, case_sensitive)
        ]

    def _matches_filters(self, doc: D, tokens: list[FilterToken]) -> bool:
        return all(self._matches_filter(doc, token) for token in tokens)

    def _matches_labels(self, doc: D, tokens: list[LabelToken]) -> bool:
        labels = set(self._labels(doc))
        return all(labels.intersection(token.ids) for token in tokens)

    def _matches_search(self, doc: D, tokens: list[str], case_sensitive: bool) -> bool:
        if not tokens:
            return True
        texts = list(self._texts(doc))
        if not case_sensitive:
            texts = [t.lower() for t in texts]
        return any(token in text for token in tokens for text in texts)

    def _matches_filter(self, doc: D, token: FilterToken) -> bool:
        raise NotImplementedError

    def _labels(self, doc: D) -> Iterable[str]:
        raise NotImplementedError

    def _texts(self, doc: D) -> Iterable[str]:
        raise NotImplementedError


_ITEM_PROPERTIES: dict[str, Callable[[InfoItemDoc], bool]] = {
    "open": lambda item: item.is_open is True,
    "closed": lambda item: not item.is_open,
    "info": lambda item: not item.is_action_item,
    "action": lambda item: item.is_action_item,
    "new": lambda item: item.is_new,
    "sticky": lambda item: item.is_action_item and item.is_open is True,
}


class ItemsFilter(_DocumentFilter[InfoItemDoc]):
    """Filter info and action items with the item keyword vocabulary."""

    def _matches_filter(self, doc: InfoItemDoc, token: FilterToken) -> bool:
        if token.key == "is":
            predicate = _ITEM_PROPERTIES.get(token.value)
            return predicate(doc) if predicate else False
        if token.key == "prio":
            return doc.priority is not None and str(doc.priority) == token.value
        if token.key == "due":
            return doc.duedate is not None and doc.duedate.startswith(token.value)
        if token.key == USER_KEY:
            return _responsibles_match(token, doc.responsibles)
        # do:<mode> only changes how the search is applied
        return token.key == "do"

    def _labels(self, doc: InfoItemDoc) -> Iterable[str]:
        return doc.labels

    def _texts(self, doc: InfoItemDoc) -> Iterable[str]:
        yield doc.subject
        for detail in doc.details:
            yield detail.text


_TOPIC_PROPERTIES: dict[str, Callable[[TopicDoc], bool]] = {
    "uncompleted": lambda topic: topic.is_open,
    "completed": lambda topic: not topic.is_open,
    "new": lambda topic: topic.is_new,
}

_TOPIC_CONTENTS: dict[str, Callable[[TopicDoc], bool]] = {
    "item": lambda topic: len(topic.info_items) > 0,
    "action": lambda topic: any(i.is_action_item for i in topic.info_items),
    "info": lambda topic: any(not i.is_action_item for i in topic.info_items),
}


class TopicsFilter(_DocumentFilter[TopicDoc]):
    """Filter topics with the topic keyword vocabulary.

    Labels and free text also match on the topic's items.
    """

    def _matches_filter(self, doc: TopicDoc, token: FilterToken) -> bool:
        if token.key == "is":
            predicate = _TOPIC_PROPERTIES.get(token.value)
            return predicate(doc) if predicate else False
        if token.key == "has":
            predicate = _TOPIC_CONTENTS.get(token.value)
            return predicate(doc) if predicate else False
        if token.key == USER_KEY:
            responsibles = list(doc.responsibles)
            for item in doc.info_items:
                if item.is_action_item:
                    responsibles.extend(item.responsibles)
            return _responsibles_match(token, responsibles)
        return token.key == "do"

    def _labels(self, doc: TopicDoc) -> Iterable[str]:
        yield from doc.labels
        for item in doc.info_items:
            yield from item.labels

    def _texts(self, doc: TopicDoc) -> Iterable[str]:
        yield doc.subject
        for item in doc.info_items:
            yield item.subject
            for detail in item.details:
                yield detail.text
