"""Canonical data models for Minutebook.

This module exports all documents used throughout the application:
- Document / BaseEntity: Base classes with id and timestamps
- MeetingSeriesDoc: A recurring meeting with labels and last-minutes cache
- MinutesDoc / Participant: One dated meeting with its topic snapshot
- TopicDoc / InfoItemDoc / DetailDoc: Agenda topics and their items
- LabelDoc: Colored labels of a series
- UserDoc / UserEmail: Users
- BroadcastMessageDoc: Admin announcements
"""

from minutebook.models.base import BaseEntity, Document, EditLockMixin, new_id, utc_now
from minutebook.models.broadcast_message import BroadcastMessageDoc
from minutebook.models.label import LabelDoc, separate_name_and_color
from minutebook.models.meeting_series import MeetingSeriesDoc
from minutebook.models.minutes import MinutesDoc
from minutebook.models.participant import Participant
from minutebook.models.topic import (
    DetailDoc,
    InfoItemDoc,
    ItemType,
    Priority,
    TopicDoc,
    priority_adapter,
)
from minutebook.models.user import UserDoc, UserEmail

__all__ = [
    # Base
    "Document",
    "BaseEntity",
    "EditLockMixin",
    "new_id",
    "utc_now",
    # Series and minutes
    "MeetingSeriesDoc",
    "MinutesDoc",
    "Participant",
    # Topics
    "TopicDoc",
    "InfoItemDoc",
    "DetailDoc",
    "ItemType",
    "Priority",
    "priority_adapter",
    # Labels
    "LabelDoc",
    "separate_name_and_color",
    # Users
    "UserDoc",
    "UserEmail",
    "BroadcastMessageDoc",
]
