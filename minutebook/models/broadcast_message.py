"""Broadcast message shown to all users until dismissed."""

from pydantic import Field

from minutebook.models.base import BaseEntity


class BroadcastMessageDoc(BaseEntity):
    """An admin announcement."""

    text: str = Field(description="Message text")
    is_active: bool = Field(default=True)
    dismiss_for_user_ids: list[str] = Field(default_factory=list)
