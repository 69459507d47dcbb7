"""Search query language over items and topics.

Provides:
- ITEM_KEYWORDS / TOPIC_KEYWORDS: Keyword vocabularies
- QueryParser: Splits a query into search, filter and label tokens
- ItemsFilter / TopicsFilter: Apply parsed queries to documents
"""

from minutebook.search.items_filter import ItemsFilter, TopicsFilter
from minutebook.search.keywords import ITEM_KEYWORDS, TOPIC_KEYWORDS, KeywordSet
from minutebook.search.query_parser import QueryParser
from minutebook.search.schemas import FilterToken, KeywordDef, LabelToken

__all__ = [
    "ITEM_KEYWORDS",
    "TOPIC_KEYWORDS",
    "KeywordSet",
    "KeywordDef",
    "FilterToken",
    "LabelToken",
    "QueryParser",
    "ItemsFilter",
    "TopicsFilter",
]
