"""Base Event class for all domain events."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from minutebook.models.base import new_id


class Event(BaseModel):
    """Base class for all domain events.

    Events are immutable records of workflow steps (series created,
    minutes finalized, ...). They are published in-process and may be
    appended to the event store as an audit trail.

    Attributes:
        event_id: Unique identifier for this event instance
        timestamp: When the event occurred
        aggregate_id: ID of the document this event relates to
        aggregate_type: Type of the document (e.g., "Minutes")
        actor_id: User who triggered the event, if known
        metadata: Additional context about the event
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
    )

    event_id: str = Field(default_factory=new_id, description="Unique event identifier")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the event occurred",
    )
    aggregate_id: str | None = Field(default=None, description="ID of the related document")
    aggregate_type: str | None = Field(default=None, description="Type of the related document")
    actor_id: str | None = Field(default=None, description="Acting user")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Additional event context")

    @property
    def event_type(self) -> str:
        """Return the event type name (class name)."""
        return self.__class__.__name__

    def to_store_dict(self) -> dict[str, Any]:
        """Convert event to a dictionary for the event store."""
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "timestamp": self.timestamp.isoformat(),
            "aggregate_id": self.aggregate_id,
            "aggregate_type": self.aggregate_type,
            "data": self.model_dump(
                mode="json",
                exclude={"event_id", "timestamp", "aggregate_id", "aggregate_type"},
            ),
        }
