"""Merge minutes snapshots into the topic ledger of their series.

On finalize the snapshot of the series' last minutes is merged into the
ledger: topics that are finally completed leave the ledger, all other
topics replace their ledger entry in tailored form (only open action
items survive). On unfinalize the ledger is rebuilt by replaying the
merge over every finalized minutes that precede the last one.

Lineage (``created_in_minute``) is stamped on the snapshot before the
merge. Topics and items keep the lineage they had in the previous
minutes; details are matched against the previous minutes by text.
"""

import structlog

from minutebook.aggregates.meeting_series import MeetingSeries
from minutebook.aggregates.session import AggregateSession
from minutebook.aggregates.topic import Topic
from minutebook.errors import InvalidStateError
from minutebook.models.minutes import MinutesDoc
from minutebook.models.topic import DetailDoc, InfoItemDoc, TopicDoc

logger = structlog.get_logger()


def _stamp_details(
    details: list[DetailDoc], previous_details: list[DetailDoc], minutes_id: str
) -> None:
    unmatched = list(previous_details)
    for detail in details:
        match = next((p for p in unmatched if p.text == detail.text), None)
        if match is not None:
            unmatched.remove(match)
            detail.id = match.id
            detail.date = match.date
            detail.created_in_minute = match.created_in_minute or minutes_id
        elif detail.created_in_minute is None:
            detail.created_in_minute = minutes_id


def _stamp_item(item: InfoItemDoc, previous: InfoItemDoc | None, minutes_id: str) -> None:
    if previous is not None and previous.created_in_minute:
        item.created_in_minute = previous.created_in_minute
    elif item.created_in_minute is None:
        item.created_in_minute = minutes_id
    _stamp_details(item.details, previous.details if previous else [], minutes_id)


def stamp_lineage(minutes: MinutesDoc, previous: MinutesDoc | None) -> None:
    """Stamp ``created_in_minute`` on the snapshot of minutes, in place.

    Topics and items present in the previous minutes keep their lineage;
    others without lineage get these minutes. A detail takes id, date and
    lineage of the first not yet matched detail with identical text in
    the previous minutes' version of its item.

    Args:
        minutes: Minutes being finalized
        previous: Minutes directly before, if any
    """
    previous_topics = {t.id: t for t in previous.topics} if previous else {}
    for topic in minutes.topics:
        previous_topic = previous_topics.get(topic.id)
        if previous_topic is not None and previous_topic.created_in_minute:
            topic.created_in_minute = previous_topic.created_in_minute
        elif topic.created_in_minute is None:
            topic.created_in_minute = minutes.id

        previous_items = (
            {i.id: i for i in previous_topic.info_items} if previous_topic else {}
        )
        for item in topic.info_items:
            _stamp_item(item, previous_items.get(item.id), minutes.id)


def merge_minutes_into_ledger(
    series: MeetingSeries, minutes: MinutesDoc, visible_for: list[str]
) -> list[TopicDoc]:
    """Merge one minutes snapshot into the in-memory ledger of series.

    The snapshot is not modified.

    Args:
        series: Series whose ledger is replaced (in memory only)
        minutes: Finalized snapshot to merge
        visible_for: Visibility copied onto every ledger entry

    Returns:
        The new ledger, ordered by sort_order
    """
    ledger = [t.model_copy(deep=True) for t in series.ledger]

    for snapshot_topic in minutes.topics:
        index = Topic.find_topic_index(snapshot_topic.id, ledger)

        if snapshot_topic.is_skipped and index is not None:
            # Skipped topics keep their ledger entry and position.
            ledger[index].is_skipped = False
            continue

        merged = Topic(series, snapshot_topic.model_copy(deep=True))
        merged.doc.is_skipped = False
        if merged.is_finally_completed():
            if index is not None:
                del ledger[index]
            continue

        merged.tailor_topic()
        merged.invalidate_is_new_flag()
        if index is None:
            ledger.append(merged.doc)
        else:
            ledger[index] = merged.doc

    for topic in ledger:
        topic.parent_id = series.id
        topic.visible_for = list(visible_for)
    ledger.sort(key=lambda t: t.sort_order)
    series.set_ledger(ledger)
    return ledger


class TopicsFinalizer:
    """Reconciles the ledger of a series with its finalized minutes."""

    def __init__(self, session: AggregateSession):
        """Initialize with the session used to load series and minutes.

        Args:
            session: Aggregate session of the current request
        """
        self._session = session

    async def _load(self, series_id: str) -> tuple[MeetingSeries, MinutesDoc]:
        series = await self._session.load_series(series_id)
        if series is None:
            msg = f"Could not find meeting series {series_id}"
            raise InvalidStateError(msg)
        last = await self._session.minutes_repo.last_minutes_of_series(series_id)
        if last is None:
            msg = f"Meeting series {series_id} has no minutes"
            raise InvalidStateError(msg)
        minutes = await self._session.load_minutes(last.id)
        return series, minutes.doc if minutes else last

    async def merge_topics_for_finalize(
        self, series_id: str, visible_for: list[str]
    ) -> list[TopicDoc]:
        """Merge the last minutes of the series into its ledger.

        Lineage is stamped on the loaded minutes in place; saving them is
        left to the caller.

        Args:
            series_id: Meeting series id
            visible_for: Visibility of the ledger entries

        Returns:
            The new ledger
        """
        series, minutes = await self._load(series_id)
        previous = await self._session.minutes_repo.previous_minutes(minutes)
        stamp_lineage(minutes, previous)

        ledger = merge_minutes_into_ledger(series, minutes, visible_for)
        await self._session.topics_repo.replace_all(series_id, ledger)
        logger.info(
            "topics merged for finalize",
            series_id=series_id,
            minutes_id=minutes.id,
            ledger_topics=len(ledger),
        )
        return ledger

    async def merge_topics_for_unfinalize(
        self, series_id: str, visible_for: list[str]
    ) -> list[TopicDoc]:
        """Rebuild the ledger as it was before the last minutes were finalized.

        Replays the merge over every finalized minutes before the last
        one, in date order. Without such minutes the ledger is empty.

        Args:
            series_id: Meeting series id
            visible_for: Visibility of the ledger entries

        Returns:
            The rebuilt ledger
        """
        series, last = await self._load(series_id)
        all_minutes = await self._session.minutes_repo.all_minutes_of_series(series_id)

        series.set_ledger([])
        for minutes in all_minutes:
            if minutes.id == last.id:
                break
            if minutes.is_finalized:
                merge_minutes_into_ledger(series, minutes, visible_for)

        await self._session.topics_repo.replace_all(series_id, series.ledger)
        logger.info(
            "topics merged for unfinalize",
            series_id=series_id,
            minutes_id=last.id,
            ledger_topics=len(series.ledger),
        )
        return series.ledger
