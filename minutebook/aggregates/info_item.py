"""InfoItem and ActionItem wrappers around item documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from minutebook.errors import InvalidStateError
from minutebook.helpers.sub_elements import get_element_by_id
from minutebook.models.topic import DetailDoc, InfoItemDoc, ItemType, priority_adapter

if TYPE_CHECKING:
    from minutebook.aggregates.topic import Topic


def _resolve_item(parent_topic: Topic, source: InfoItemDoc | dict[str, Any] | str) -> InfoItemDoc:
    if isinstance(source, str):
        doc = get_element_by_id(source, parent_topic.get_info_items())
        if doc is None:
            msg = f"Could not find item {source} in topic {parent_topic.id}"
            raise InvalidStateError(msg)
        return doc
    if isinstance(source, dict):
        return InfoItemDoc.model_validate(source)
    return source


class InfoItem:
    """Wraps an item document together with its parent topic."""

    def __init__(
        self,
        parent_topic: Topic | None,
        source: InfoItemDoc | dict[str, Any] | str,
    ):
        """Bind an item to its topic.

        Args:
            parent_topic: Topic holding the item
            source: Item document, raw dict, or id of an item of the topic

        Raises:
            InvalidStateError: If the topic is missing or the id is unknown
        """
        if parent_topic is None:
            msg = "An item needs a parent topic"
            raise InvalidStateError(msg)
        self._parent_topic = parent_topic
        self._doc = _resolve_item(parent_topic, source)

    @property
    def id(self) -> str:
        return self._doc.id

    @property
    def doc(self) -> InfoItemDoc:
        return self._doc

    @property
    def parent_topic(self) -> Topic:
        return self._parent_topic

    @staticmethod
    def is_action_item_doc(doc: InfoItemDoc) -> bool:
        return doc.item_type is ItemType.ACTION_ITEM

    @staticmethod
    def is_created_in_minutes_doc(doc: InfoItemDoc, minutes_id: str | None) -> bool:
        return doc.created_in_minute == minutes_id

    def is_action_item(self) -> bool:
        return self.is_action_item_doc(self._doc)

    def is_sticky(self) -> bool:
        """Plain info items are never carried into new minutes."""
        return False

    def is_created_in_minutes(self, minutes_id: str | None) -> bool:
        return self.is_created_in_minutes_doc(self._doc, minutes_id)

    def is_delete_allowed(self, current_minutes_id: str | None) -> bool:
        return self._doc.created_in_minute == current_minutes_id

    def get_subject(self) -> str:
        return self._doc.subject

    def get_details(self) -> list[DetailDoc]:
        return self._doc.details

    def add_details(self, minutes_id: str | None, text: str = "") -> DetailDoc:
        """Append a detail note dated today.

        Args:
            minutes_id: Minutes the note is written in, recorded as lineage
            text: Note text

        Returns:
            The new detail document
        """
        detail = DetailDoc(text=text, created_in_minute=minutes_id)
        self._doc.details.append(detail)
        return detail

    def update_details(self, index: int, text: str) -> None:
        """Replace the text of the detail at index; an empty text removes it.

        Raises:
            IndexError: If there is no detail at index
        """
        if text == "":
            del self._doc.details[index]
            return
        detail = self._doc.details[index]
        detail.text = text
        detail.is_new = True

    def invalidate_is_new_flag(self) -> None:
        self._doc.is_new = False
        for detail in self._doc.details:
            detail.is_new = False

    def add_labels_by_ids(self, label_ids: list[str]) -> None:
        for label_id in label_ids:
            if label_id not in self._doc.labels:
                self._doc.labels.append(label_id)

    def has_label_with_id(self, label_id: str) -> bool:
        return label_id in self._doc.labels

    async def save(self, insert_placement_top: bool = True) -> str:
        """Persist the item through its topic.

        Returns:
            Id of the saved item
        """
        return await self._parent_topic.upsert_info_item(
            self._doc, insert_placement_top=insert_placement_top
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._doc.model_dump_json(indent=2)})"


class ActionItem(InfoItem):
    """An item with responsibles, priority and due date."""

    def __init__(
        self,
        parent_topic: Topic | None,
        source: InfoItemDoc | dict[str, Any] | str,
    ):
        if isinstance(source, dict):
            source = {**source, "item_type": ItemType.ACTION_ITEM}
        super().__init__(parent_topic, source)
        if self._doc.item_type is not ItemType.ACTION_ITEM:
            # Promote an info item; re-validate so that defaults are applied.
            self._doc.item_type = ItemType.ACTION_ITEM
            promoted = InfoItemDoc.model_validate(self._doc.model_dump())
            self._doc.is_open = promoted.is_open
            self._doc.priority = promoted.priority
            self._doc.duedate = promoted.duedate

    def is_sticky(self) -> bool:
        return self._doc.is_open is True

    def toggle_state(self) -> None:
        self._doc.is_open = not self._doc.is_open

    def get_priority(self) -> int | None:
        return self._doc.priority

    def set_priority(self, priority: int) -> None:
        """Set the priority.

        Raises:
            pydantic.ValidationError: If priority is not within 1..5
        """
        self._doc.priority = priority_adapter.validate_python(priority)

    def get_duedate(self) -> str | None:
        return self._doc.duedate

    def has_responsibles(self) -> bool:
        return len(self._doc.responsibles) > 0

    def get_responsibles(self) -> list[str]:
        return self._doc.responsibles

    def get_date_from_details(self, index: int = 0) -> str | None:
        details = self._doc.details
        return details[index].date if len(details) > index else None

    def get_text_from_details(self, index: int = 0) -> str:
        details = self._doc.details
        return details[index].text if len(details) > index else ""


def create_info_item(
    parent_topic: Topic, doc: InfoItemDoc | dict[str, Any]
) -> InfoItem:
    """Wrap a document in ActionItem or InfoItem depending on its type."""
    if isinstance(doc, dict):
        doc = InfoItemDoc.model_validate(doc)
    if InfoItem.is_action_item_doc(doc):
        return ActionItem(parent_topic, doc)
    return InfoItem(parent_topic, doc)
