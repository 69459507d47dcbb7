"""Advisory soft locks: who is currently editing a document.

Locks are informational only. Setting a lock overwrites any previous
holder; removing one is refused for other users' locks unless
``ignore_lock`` is given.
"""

from minutebook.aggregates.info_item import InfoItem
from minutebook.aggregates.session import AggregateSession
from minutebook.aggregates.topic import Topic
from minutebook.errors import InvalidStateError
from minutebook.models.base import EditLockMixin, utc_now
from minutebook.models.meeting_series import MeetingSeriesDoc


def _set(doc: EditLockMixin, user_id: str) -> None:
    doc.is_edited_by = user_id
    doc.is_edited_date = utc_now()


def _remove(doc: EditLockMixin, user_id: str, ignore_lock: bool) -> bool:
    if doc.is_edited_by is None:
        return False
    if not ignore_lock and doc.is_edited_by != user_id:
        return False
    doc.clear_edit_lock()
    return True


class EditLockService:
    """Sets and removes soft locks on series, topics, items and details."""

    def __init__(self, session: AggregateSession):
        self._session = session

    # Series

    async def set_is_edited_series(self, series_id: str, user_id: str) -> MeetingSeriesDoc:
        series = await self._session.load_series(series_id)
        if series is None:
            msg = f"Could not find meeting series {series_id}"
            raise InvalidStateError(msg)
        _set(series.doc, user_id)
        await series.save()
        return series.doc

    async def remove_is_edited_series(
        self, series_id: str, user_id: str, ignore_lock: bool = False
    ) -> bool:
        """Drop the lock on a series.

        Returns:
            True if a lock was removed
        """
        series = await self._session.load_series(series_id)
        if series is None:
            return False
        removed = _remove(series.doc, user_id, ignore_lock)
        if removed:
            await series.save()
        return removed

    # Topics, items and details inside minutes

    async def _topic(self, minutes_id: str, topic_id: str) -> Topic:
        minutes = await self._session.load_minutes(minutes_id)
        if minutes is None:
            msg = f"Could not find minutes {minutes_id}"
            raise InvalidStateError(msg)
        return Topic(minutes_id, topic_id, lookup=self._session)

    async def set_is_edited_topic(self, minutes_id: str, topic_id: str, user_id: str) -> None:
        topic = await self._topic(minutes_id, topic_id)
        _set(topic.doc, user_id)
        await topic.save()

    async def remove_is_edited_topic(
        self, minutes_id: str, topic_id: str, user_id: str, ignore_lock: bool = False
    ) -> bool:
        topic = await self._topic(minutes_id, topic_id)
        removed = _remove(topic.doc, user_id, ignore_lock)
        if removed:
            await topic.save()
        return removed

    async def set_is_edited_info_item(
        self, minutes_id: str, topic_id: str, item_id: str, user_id: str
    ) -> None:
        topic = await self._topic(minutes_id, topic_id)
        item = InfoItem(topic, item_id)
        _set(item.doc, user_id)
        await topic.save()

    async def remove_is_edited_info_item(
        self,
        minutes_id: str,
        topic_id: str,
        item_id: str,
        user_id: str,
        ignore_lock: bool = False,
    ) -> bool:
        topic = await self._topic(minutes_id, topic_id)
        item = InfoItem(topic, item_id)
        removed = _remove(item.doc, user_id, ignore_lock)
        if removed:
            await topic.save()
        return removed

    async def set_is_edited_detail(
        self, minutes_id: str, topic_id: str, item_id: str, detail_index: int, user_id: str
    ) -> None:
        """Lock one detail of an item.

        Raises:
            InvalidStateError: If the detail index is out of range
        """
        topic = await self._topic(minutes_id, topic_id)
        details = InfoItem(topic, item_id).get_details()
        if not 0 <= detail_index < len(details):
            msg = f"Item {item_id} has no detail {detail_index}"
            raise InvalidStateError(msg)
        _set(details[detail_index], user_id)
        await topic.save()

    async def remove_is_edited_detail(
        self,
        minutes_id: str,
        topic_id: str,
        item_id: str,
        detail_index: int,
        user_id: str,
        ignore_lock: bool = False,
    ) -> bool:
        topic = await self._topic(minutes_id, topic_id)
        details = InfoItem(topic, item_id).get_details()
        if not 0 <= detail_index < len(details):
            return False
        removed = _remove(details[detail_index], user_id, ignore_lock)
        if removed:
            await topic.save()
        return removed

    async def remove_all_locks_of_user(self, minutes_id: str, user_id: str) -> int:
        """Release every lock the user holds inside one minutes.

        Returns:
            Number of locks released
        """
        minutes = await self._session.load_minutes(minutes_id)
        if minutes is None:
            return 0
        released = 0
        for topic_doc in minutes.topics:
            docs: list[EditLockMixin] = [topic_doc]
            for item_doc in topic_doc.info_items:
                docs.append(item_doc)
                docs.extend(item_doc.details)
            released += sum(_remove(doc, user_id, ignore_lock=False) for doc in docs)
        if released and not minutes.is_finalized:
            await minutes.save()
        return released
