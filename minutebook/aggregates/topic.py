"""Topic aggregate: a topic document bound to its minutes or series.

Mutations are applied in memory; ``save()`` (or an upsert with
``save_changes=True``) persists the topic through its parent.
"""

from enum import Enum
from typing import Any

from minutebook.aggregates.info_item import InfoItem, create_info_item
from minutebook.aggregates.parents import ParentLookup, TopicParent
from minutebook.errors import InvalidStateError
from minutebook.helpers.sub_elements import find_index_by_id
from minutebook.models.topic import InfoItemDoc, TopicDoc


class TopicState(str, Enum):
    """Where a topic stands in its lifecycle across minutes."""

    NEW = "new"
    CARRIED_OPEN = "carried-open"
    RECURRING = "recurring"
    FINALLY_COMPLETED = "finally-completed"


def _resolve_parent(
    parent: TopicParent | str | None, lookup: ParentLookup | None
) -> TopicParent:
    if isinstance(parent, str):
        resolved = lookup.get(parent) if lookup is not None else None
        if resolved is None:
            msg = f"Could not resolve parent element {parent}"
            raise InvalidStateError(msg)
        return resolved
    if isinstance(parent, TopicParent):
        return parent
    msg = "Illegal parent element"
    raise InvalidStateError(msg)


def _resolve_topic(parent: TopicParent, source: TopicDoc | dict[str, Any] | str) -> TopicDoc:
    if isinstance(source, str):
        doc = parent.find_topic(source)
        if doc is None:
            msg = f"Could not find topic {source}"
            raise InvalidStateError(msg)
        return doc
    if isinstance(source, dict):
        return TopicDoc.model_validate(source)
    return source


class Topic:
    """A topic together with the minutes or series holding it."""

    def __init__(
        self,
        parent: TopicParent | str,
        source: TopicDoc | dict[str, Any] | str,
        lookup: ParentLookup | None = None,
    ):
        """Resolve parent and topic document.

        Args:
            parent: Parent aggregate, or its id to be resolved via lookup
            source: Topic document, raw dict, or id of a topic of the parent
            lookup: Resolver for parent ids

        Raises:
            InvalidStateError: If the parent cannot be resolved or the
                topic id is not found in it
        """
        self._parent = _resolve_parent(parent, lookup)
        self._doc = _resolve_topic(self._parent, source)

    # Static helpers

    @staticmethod
    def has_open_action_item_doc(topic_doc: TopicDoc) -> bool:
        return topic_doc.has_open_action_item()

    @staticmethod
    def find_topic_index(topic_id: str, topics: list[TopicDoc]) -> int | None:
        return find_index_by_id(topic_id, topics)

    # Accessors

    @property
    def id(self) -> str:
        return self._doc.id

    @property
    def doc(self) -> TopicDoc:
        return self._doc

    @property
    def parent(self) -> TopicParent:
        return self._parent

    def get_subject(self) -> str:
        return self._doc.subject

    def set_subject(self, subject: str) -> None:
        self._doc.subject = subject

    def get_info_items(self) -> list[InfoItemDoc]:
        return self._doc.info_items

    def set_items(self, items: list[InfoItemDoc]) -> None:
        self._doc.info_items = items

    def get_only_info_items(self) -> list[InfoItemDoc]:
        return [doc for doc in self._doc.info_items if not doc.is_action_item]

    def get_only_action_items(self) -> list[InfoItemDoc]:
        return [doc for doc in self._doc.info_items if doc.is_action_item]

    def get_open_action_items(self) -> list[InfoItemDoc]:
        return [doc for doc in self._doc.info_items if doc.is_action_item and doc.is_open]

    def find_info_item(self, item_id: str) -> InfoItem | None:
        index = find_index_by_id(item_id, self._doc.info_items)
        if index is None:
            return None
        return create_info_item(self, self._doc.info_items[index])

    # State

    def has_open_action_item(self) -> bool:
        return self._doc.has_open_action_item()

    def is_recurring(self) -> bool:
        return self._doc.is_recurring

    def is_skipped(self) -> bool:
        return self._doc.is_skipped

    def is_finally_completed(self) -> bool:
        """Closed, no open action item and not recurring."""
        return (
            not self._doc.is_open
            and not self.has_open_action_item()
            and not self.is_recurring()
        )

    def is_delete_allowed(self) -> bool:
        """Only the minutes that created a topic may delete it."""
        return self._doc.created_in_minute == self._parent.id

    @property
    def state(self) -> TopicState:
        if self.is_finally_completed():
            return TopicState.FINALLY_COMPLETED
        if self.is_recurring():
            return TopicState.RECURRING
        if self._doc.is_new:
            return TopicState.NEW
        return TopicState.CARRIED_OPEN

    def toggle_state(self) -> None:
        self._doc.is_open = not self._doc.is_open

    def toggle_recurring(self) -> None:
        self._doc.is_recurring = not self._doc.is_recurring

    def toggle_skip(self, force_open_topic: bool = True) -> None:
        """Toggle skip; skipping a closed topic reopens it unless told not to."""
        self._doc.is_skipped = not self._doc.is_skipped
        if force_open_topic and self._doc.is_skipped and not self._doc.is_open:
            self.toggle_state()

    def invalidate_is_new_flag(self) -> None:
        self._doc.is_new = False
        for item_doc in self._doc.info_items:
            create_info_item(self, item_doc).invalidate_is_new_flag()

    def tailor_topic(self) -> None:
        """Drop every item that is not sticky (open action item)."""
        self._doc.info_items = [
            item_doc
            for item_doc in self._doc.info_items
            if create_info_item(self, item_doc).is_sticky()
        ]

    def close_topic_and_all_open_action_items(self) -> None:
        self._doc.is_open = False
        self._doc.is_recurring = False
        for item_doc in self.get_open_action_items():
            item_doc.is_open = False

    # Labels and responsibles

    def add_labels_by_ids(self, label_ids: list[str]) -> None:
        for label_id in label_ids:
            if not self.has_label_with_id(label_id):
                self._doc.labels.append(label_id)

    def has_label_with_id(self, label_id: str) -> bool:
        return label_id in self._doc.labels

    def get_labels_raw_array(self) -> list[str]:
        return self._doc.labels

    def has_responsibles(self) -> bool:
        return len(self._doc.responsibles) > 0

    def get_responsibles(self) -> list[str]:
        return self._doc.responsibles

    # Items

    async def upsert_info_item(
        self,
        item_doc: InfoItemDoc | dict[str, Any],
        save_changes: bool = True,
        insert_placement_top: bool = True,
    ) -> str:
        """Insert a new item or overwrite the item with the same id.

        A raw dict without an id gets a fresh one. New items created
        inside minutes are stamped with that minutes' id.

        Args:
            item_doc: Item document or raw dict
            save_changes: Persist the topic afterwards
            insert_placement_top: Insert new items first instead of last

        Returns:
            Id of the upserted item
        """
        if isinstance(item_doc, dict):
            item_doc = InfoItemDoc.model_validate(item_doc)
        items = self._doc.info_items
        index = find_index_by_id(item_doc.id, items)
        if index is None:
            if item_doc.created_in_minute is None and self._parent.minutes_id:
                item_doc.created_in_minute = self._parent.minutes_id
            if insert_placement_top:
                items.insert(0, item_doc)
            else:
                items.append(item_doc)
        else:
            items[index] = item_doc

        if save_changes:
            await self.save()
        return item_doc.id

    async def remove_info_item(self, item_id: str) -> bool:
        """Remove an item and persist the topic.

        Returns:
            False if no item has that id

        Raises:
            InvalidStateError: For an action item not created in these minutes
        """
        index = find_index_by_id(item_id, self._doc.info_items)
        if index is None:
            return False
        item_doc = self._doc.info_items[index]
        if InfoItem.is_action_item_doc(item_doc) and not InfoItem.is_created_in_minutes_doc(
            item_doc, self._parent.minutes_id
        ):
            msg = (
                "It is not allowed to remove an action item which was not "
                "created within the current minutes"
            )
            raise InvalidStateError(msg)
        del self._doc.info_items[index]
        await self.save()
        return True

    async def save(self) -> None:
        await self._parent.upsert_topic(self._doc)

    def __repr__(self) -> str:
        return f"Topic({self._doc.model_dump_json(indent=2)})"

