"""Topic, info item and detail documents.

The same documents are used in two places: embedded in a minutes
snapshot, and as entries of a meeting series' topic ledger. Ledger
entries additionally carry ``parent_id`` and ``visible_for``.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import Field, TypeAdapter, model_validator

from minutebook.config import settings
from minutebook.helpers.dates import current_date_plus_delta_days
from minutebook.models.base import Document, EditLockMixin, utc_now

Priority = Annotated[int, Field(ge=1, le=5)]
priority_adapter: TypeAdapter[int] = TypeAdapter(Priority)


class ItemType(str, Enum):
    """Discriminator of topic items."""

    INFO_ITEM = "infoItem"
    ACTION_ITEM = "actionItem"


class DetailDoc(Document, EditLockMixin):
    """A dated text note attached to an item."""

    date: str = Field(
        default_factory=current_date_plus_delta_days,
        description="Date of the note (YYYY-MM-DD)",
    )
    text: str = Field(default="", description="Note text")
    is_new: bool = Field(default=True)
    created_in_minute: str | None = Field(
        default=None, description="Minutes this detail was first finalized in"
    )


class InfoItemDoc(Document, EditLockMixin):
    """An info item or, with ``item_type=actionItem``, an action item.

    Action items get ``is_open``, ``priority`` and ``duedate`` defaults
    on construction; info items leave them unset.
    """

    item_type: ItemType = Field(default=ItemType.INFO_ITEM)
    subject: str = Field(description="Item subject line")
    labels: list[str] = Field(default_factory=list, description="Label ids")
    is_new: bool = Field(default=True)
    created_in_minute: str | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    created_by: str | None = Field(default=None)
    details: list[DetailDoc] = Field(default_factory=list)

    # Action item fields
    is_open: bool | None = Field(default=None)
    responsibles: list[str] = Field(
        default_factory=list, description="User ids or free-text names/emails"
    )
    priority: Priority | None = Field(default=None)
    duedate: str | None = Field(default=None, description="Due date (YYYY-MM-DD)")

    @model_validator(mode="after")
    def _apply_action_item_defaults(self) -> "InfoItemDoc":
        if self.item_type is ItemType.ACTION_ITEM:
            if self.is_open is None:
                self.is_open = True
            if self.priority is None:
                self.priority = settings.default_action_item_priority
            if not self.duedate:
                self.duedate = current_date_plus_delta_days(settings.action_item_due_days)
        return self

    @property
    def is_action_item(self) -> bool:
        return self.item_type is ItemType.ACTION_ITEM


class TopicDoc(Document, EditLockMixin):
    """An agenda topic."""

    subject: str = Field(description="Topic subject line")
    is_open: bool = Field(default=True)
    is_new: bool = Field(default=True)
    is_recurring: bool = Field(default=False)
    is_skipped: bool = Field(default=False)
    sort_order: int = Field(default=0)
    labels: list[str] = Field(default_factory=list, description="Label ids")
    responsibles: list[str] = Field(default_factory=list)
    info_items: list[InfoItemDoc] = Field(default_factory=list)
    created_in_minute: str | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)

    # Ledger-only fields
    parent_id: str | None = Field(default=None, description="Owning meeting series")
    visible_for: list[str] | None = Field(default=None)

    def has_open_action_item(self) -> bool:
        return any(item.is_action_item and item.is_open is True for item in self.info_items)
