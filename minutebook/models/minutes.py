"""Minutes document: one dated occurrence of a meeting series."""

from datetime import datetime

from pydantic import Field

from minutebook.helpers.dates import current_date_plus_delta_days
from minutebook.models.base import BaseEntity
from minutebook.models.participant import Participant
from minutebook.models.topic import TopicDoc


class MinutesDoc(BaseEntity):
    """Minutes with their own topic snapshot.

    ``finalized_version`` starts at 0 and becomes 1 on the first
    finalize. ``finalized_history`` is append-only.
    """

    meeting_series_id: str = Field(description="Back-reference to the series")
    date: str = Field(
        default_factory=current_date_plus_delta_days,
        description="Meeting date (YYYY-MM-DD)",
    )
    topics: list[TopicDoc] = Field(default_factory=list)
    participants: list[Participant] = Field(default_factory=list)
    participants_additional: str = Field(default="")
    visible_for: list[str] = Field(default_factory=list)
    informed_users: list[str] = Field(default_factory=list)
    global_note: str = Field(default="")
    global_note_pinned: bool = Field(default=False)
    agenda_sent_at: datetime | None = Field(default=None)

    is_finalized: bool = Field(default=False)
    finalized_version: int = Field(default=0, ge=0)
    finalized_at: datetime | None = Field(default=None)
    finalized_by: str | None = Field(default=None, description="Display name")
    finalized_history: list[str] = Field(default_factory=list)
