"""Typed event definitions for workflow steps.

- MeetingSeriesCreated: A new meeting series was created
- MinutesCreated: New minutes were added to a series
- MinutesRemoved: Non-finalized minutes were removed
- MinutesFinalized: Minutes were finalized and merged into the ledger
- MinutesUnfinalized: The last minutes were reopened
- UsersImported: Users were imported from an LDAP source
- BroadcastMessageShown: An admin announcement was published
"""

from pydantic import Field

from minutebook.events.base import Event


class MeetingSeriesCreated(Event):
    """Emitted when a meeting series is created."""

    aggregate_type: str = "MeetingSeries"
    project: str = Field(description="Project name")
    name: str = Field(description="Series name")


class MinutesCreated(Event):
    """Emitted when new minutes are added to a series."""

    aggregate_type: str = "Minutes"
    meeting_series_id: str = Field(description="Owning series")
    date: str = Field(description="Meeting date (YYYY-MM-DD)")
    topic_count: int = Field(default=0, description="Topics carried over from the ledger")


class MinutesRemoved(Event):
    """Emitted when non-finalized minutes are removed."""

    aggregate_type: str = "Minutes"
    meeting_series_id: str = Field(description="Owning series")


class MinutesFinalized(Event):
    """Emitted when minutes are finalized."""

    aggregate_type: str = "Minutes"
    meeting_series_id: str = Field(description="Owning series")
    version: int = Field(description="Finalized version")
    finalized_by: str = Field(description="Display name of the finalizing user")
    ledger_topic_count: int = Field(default=0, description="Ledger size after merge")


class MinutesUnfinalized(Event):
    """Emitted when the last minutes of a series are unfinalized."""

    aggregate_type: str = "Minutes"
    meeting_series_id: str = Field(description="Owning series")
    version: int = Field(description="Version that was reopened")
    unfinalized_by: str = Field(description="Display name of the acting user")


class UsersImported(Event):
    """Emitted after an LDAP import run."""

    aggregate_type: str = "User"
    inserted: int = Field(default=0)
    updated: int = Field(default=0)


class BroadcastMessageShown(Event):
    """Emitted when a broadcast message is published."""

    aggregate_type: str = "BroadcastMessage"
    text: str = Field(description="Message text")
