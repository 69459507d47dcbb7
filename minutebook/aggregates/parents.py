"""Capabilities a topic needs from whatever holds it.

Both the minutes aggregate (topic snapshot) and the meeting series
aggregate (topic ledger) implement ``TopicParent``.
"""

from typing import Protocol, runtime_checkable

from minutebook.models.topic import TopicDoc


@runtime_checkable
class TopicParent(Protocol):
    """Holder of topics that can look them up and persist them."""

    @property
    def id(self) -> str: ...

    @property
    def minutes_id(self) -> str | None:
        """Id of the minutes document, or None for a meeting series."""
        ...

    def find_topic(self, topic_id: str) -> TopicDoc | None: ...

    async def upsert_topic(
        self, topic_doc: TopicDoc, insert_placement_top: bool = True
    ) -> None: ...


class ParentLookup(Protocol):
    """Resolves a parent id to an already loaded parent."""

    def get(self, parent_id: str) -> TopicParent | None: ...
