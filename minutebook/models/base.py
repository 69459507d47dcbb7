"""Base document classes for all stored models."""

import re
from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

_GENERATED_ID = re.compile(r"[0-9a-f]{32}")


def new_id() -> str:
    """Generate an id for any document or sub-document."""
    return uuid4().hex


def is_generated_id(value: str) -> bool:
    """True if value has the shape of an id from new_id()."""
    return _GENERATED_ID.fullmatch(value) is not None


def utc_now() -> datetime:
    """Current UTC timestamp."""
    return datetime.now(UTC)


class Document(BaseModel):
    """Base class for every persisted document and sub-document.

    Provides:
    - Unique string ID from the shared id scheme
    - Standard serialization config
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_default=True,
        from_attributes=True,
    )

    id: str = Field(default_factory=new_id, description="Unique document identifier")


class EditLockMixin(BaseModel):
    """Advisory soft-lock fields.

    Only records who is editing; nothing enforces the lock atomically.
    """

    is_edited_by: str | None = Field(default=None, description="User currently editing")
    is_edited_date: datetime | None = Field(default=None, description="When editing began")

    def clear_edit_lock(self) -> None:
        """Drop the soft lock."""
        self.is_edited_by = None
        self.is_edited_date = None


class BaseEntity(Document):
    """Top-level document with created/updated timestamps."""

    created_at: datetime = Field(
        default_factory=utc_now,
        description="When entity was created",
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        description="When entity was last updated",
    )

    def touch(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = utc_now()
