"""Event infrastructure for Minutebook.

Provides:
- Event: Base class for all domain events
- EventBus: In-process pub/sub for event routing
- EventStore: Append-only event persistence
"""

from minutebook.events.base import Event
from minutebook.events.bus import EventBus
from minutebook.events.store import EventStore
from minutebook.events.types import (
    BroadcastMessageShown,
    MeetingSeriesCreated,
    MinutesCreated,
    MinutesFinalized,
    MinutesRemoved,
    MinutesUnfinalized,
    UsersImported,
)

__all__ = [
    # Base
    "Event",
    # Infrastructure
    "EventBus",
    "EventStore",
    # Event types
    "MeetingSeriesCreated",
    "MinutesCreated",
    "MinutesRemoved",
    "MinutesFinalized",
    "MinutesUnfinalized",
    "UsersImported",
    "BroadcastMessageShown",
]
