"""Meeting series document.

The series' topic ledger is stored separately (one row per topic,
keyed by series id) and is not embedded here.
"""

from pydantic import Field

from minutebook.models.base import BaseEntity, EditLockMixin
from minutebook.models.label import LabelDoc


class MeetingSeriesDoc(BaseEntity, EditLockMixin):
    """A recurring meeting and its denormalized last-minutes cache."""

    project: str = Field(description="Project the series belongs to")
    name: str = Field(description="Series name")
    visible_for: list[str] = Field(default_factory=list, description="User ids")
    informed_users: list[str] = Field(default_factory=list, description="User ids")
    available_labels: list[LabelDoc] = Field(default_factory=list)
    additional_responsibles: list[str] = Field(default_factory=list)
    minutes: list[str] = Field(default_factory=list, description="Minutes ids")

    last_minutes_id: str | None = Field(default=None)
    last_minutes_date: str = Field(default="")
    last_minutes_finalized: bool = Field(default=False)
