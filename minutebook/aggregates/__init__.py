"""Aggregates wrapping documents with their domain behavior.

- Topic / InfoItem / ActionItem: topic and item state transitions
- Minutes: a minutes document and its topic snapshot
- MeetingSeries: a series with labels and its topic ledger
- AggregateSession: identity map resolving parent ids
"""

from minutebook.aggregates.info_item import ActionItem, InfoItem, create_info_item
from minutebook.aggregates.meeting_series import MeetingSeries
from minutebook.aggregates.minutes import Minutes
from minutebook.aggregates.parents import ParentLookup, TopicParent
from minutebook.aggregates.session import AggregateSession
from minutebook.aggregates.topic import Topic, TopicState

__all__ = [
    "ActionItem",
    "AggregateSession",
    "InfoItem",
    "MeetingSeries",
    "Minutes",
    "ParentLookup",
    "Topic",
    "TopicParent",
    "TopicState",
    "create_info_item",
]
