"""Series and minutes lifecycle: create, add, remove, visibility."""

from datetime import date, timedelta

import structlog

from minutebook.aggregates.meeting_series import MeetingSeries
from minutebook.aggregates.minutes import Minutes
from minutebook.aggregates.session import AggregateSession
from minutebook.errors import InvalidStateError
from minutebook.events.bus import EventBus
from minutebook.events.types import MeetingSeriesCreated, MinutesCreated, MinutesRemoved
from minutebook.helpers.dates import format_date_iso8601
from minutebook.models.meeting_series import MeetingSeriesDoc
from minutebook.models.minutes import MinutesDoc
from minutebook.models.topic import TopicDoc
from minutebook.workflow.last_minutes import refresh_last_minutes_fields

logger = structlog.get_logger()


def _carry_over(ledger: list[TopicDoc]) -> list[TopicDoc]:
    """Snapshot copies of ledger topics for new minutes."""
    topics = []
    for entry in ledger:
        topic = entry.model_copy(deep=True)
        topic.is_skipped = False
        topic.parent_id = None
        topic.visible_for = None
        topic.clear_edit_lock()
        if topic.is_recurring:
            topic.is_open = True
        topics.append(topic)
    return topics


class MinutesWorkflow:
    """Creates series, adds and removes minutes, propagates visibility."""

    def __init__(self, session: AggregateSession, event_bus: EventBus | None = None):
        """Initialize workflow.

        Args:
            session: Aggregate session for loading and saving documents
            event_bus: Optional bus for lifecycle events
        """
        self._session = session
        self._event_bus = event_bus

    async def create_series(
        self,
        project: str,
        name: str,
        visible_for: list[str] | None = None,
        informed_users: list[str] | None = None,
        actor_id: str | None = None,
    ) -> MeetingSeriesDoc:
        """Create and persist a new meeting series with an empty ledger."""
        doc = MeetingSeriesDoc(
            project=project,
            name=name,
            visible_for=visible_for or [],
            informed_users=informed_users or [],
        )
        await self._session.series_repo.save(doc)
        self._session.register(
            MeetingSeries(doc, [], self._session.series_repo, self._session.topics_repo)
        )

        logger.info("meeting series created", series_id=doc.id, project=project, name=name)
        if self._event_bus:
            await self._event_bus.publish(
                MeetingSeriesCreated(
                    aggregate_id=doc.id, actor_id=actor_id, project=project, name=name
                )
            )
        return doc

    async def add_new_minutes(
        self,
        series_id: str,
        minutes_date: str | None = None,
        today: date | None = None,
        actor_id: str | None = None,
    ) -> MinutesDoc:
        """Add minutes to a series, carrying the ledger forward.

        The date defaults to today, or the day after the last minutes if
        today is not later than them.

        Args:
            series_id: Meeting series id
            minutes_date: Explicit date (YYYY-MM-DD); must follow the last minutes
            today: Reference date for the default
            actor_id: Acting user

        Returns:
            The new minutes document

        Raises:
            InvalidStateError: If the series is unknown, its last minutes
                are not finalized, or the date is not after them
        """
        series = await self._require_series(series_id)
        last = await self._session.minutes_repo.last_minutes_of_series(series_id)
        if last is not None and not last.is_finalized:
            msg = "New minutes can only be added once the last minutes are finalized"
            raise InvalidStateError(msg)

        if minutes_date is None:
            minutes_date = format_date_iso8601(today or date.today())
            if last is not None and minutes_date <= last.date:
                following = date.fromisoformat(last.date) + timedelta(days=1)
                minutes_date = format_date_iso8601(following)
        elif not self.is_minutes_date_allowed(minutes_date, last):
            msg = f"Minutes date {minutes_date} must be after {last.date if last else ''}"
            raise InvalidStateError(msg)

        doc = MinutesDoc(
            meeting_series_id=series_id,
            date=minutes_date,
            topics=_carry_over(series.ledger),
            visible_for=list(series.doc.visible_for),
            informed_users=list(series.doc.informed_users),
        )
        if last is not None and last.global_note_pinned:
            doc.global_note = last.global_note
            doc.global_note_pinned = True

        minutes = Minutes(doc, self._session.minutes_repo)
        minutes.generate_new_participants()
        await minutes.save()
        self._session.register(minutes)

        series.doc.minutes.append(doc.id)
        await refresh_last_minutes_fields(series.doc, self._session.minutes_repo)
        await series.save()

        logger.info(
            "minutes created",
            minutes_id=doc.id,
            series_id=series_id,
            date=doc.date,
            topics=len(doc.topics),
        )
        if self._event_bus:
            await self._event_bus.publish(
                MinutesCreated(
                    aggregate_id=doc.id,
                    actor_id=actor_id,
                    meeting_series_id=series_id,
                    date=doc.date,
                    topic_count=len(doc.topics),
                )
            )
        return doc

    async def remove_minutes(self, minutes_id: str, actor_id: str | None = None) -> bool:
        """Remove non-finalized minutes.

        Returns:
            False if there are no such minutes

        Raises:
            InvalidStateError: If the minutes are finalized
        """
        minutes = await self._session.load_minutes(minutes_id)
        if minutes is None:
            return False
        if minutes.is_finalized:
            msg = "Finalized minutes cannot be removed"
            raise InvalidStateError(msg)

        await self._session.minutes_repo.remove(minutes_id)
        self._session.forget(minutes_id)

        series = await self._session.load_series(minutes.meeting_series_id)
        if series is not None:
            if minutes_id in series.doc.minutes:
                series.doc.minutes.remove(minutes_id)
            await refresh_last_minutes_fields(series.doc, self._session.minutes_repo)
            await series.save()

        logger.info(
            "minutes removed", minutes_id=minutes_id, series_id=minutes.meeting_series_id
        )
        if self._event_bus:
            await self._event_bus.publish(
                MinutesRemoved(
                    aggregate_id=minutes_id,
                    actor_id=actor_id,
                    meeting_series_id=minutes.meeting_series_id,
                )
            )
        return True

    async def update_last_minutes_fields(self, series_id: str) -> MeetingSeriesDoc:
        """Recompute and persist the series' last-minutes cache."""
        series = await self._require_series(series_id)
        await refresh_last_minutes_fields(series.doc, self._session.minutes_repo)
        await series.save()
        return series.doc

    async def sync_visibility(
        self,
        series_id: str,
        visible_for: list[str],
        informed_users: list[str] | None = None,
    ) -> int:
        """Set visibility of a series and propagate it to its minutes and ledger.

        Participants are regenerated for non-finalized minutes only.

        Returns:
            Number of minutes updated
        """
        series = await self._require_series(series_id)
        series.doc.visible_for = list(visible_for)
        if informed_users is not None:
            series.doc.informed_users = list(informed_users)
        await series.save()

        all_minutes = await self._session.minutes_repo.all_minutes_of_series(series_id)
        for doc in all_minutes:
            doc.visible_for = list(visible_for)
            if informed_users is not None:
                doc.informed_users = list(informed_users)
            minutes = Minutes(doc, self._session.minutes_repo)
            if not minutes.is_finalized:
                minutes.generate_new_participants()
            await minutes.save()
            self._session.forget(doc.id)

        for topic_doc in series.ledger:
            topic_doc.visible_for = list(visible_for)
        await self._session.topics_repo.replace_all(series_id, series.ledger)

        logger.info(
            "visibility synced", series_id=series_id, minutes=len(all_minutes)
        )
        return len(all_minutes)

    @staticmethod
    def is_minutes_date_allowed(minutes_date: str, last: MinutesDoc | None) -> bool:
        """A date is allowed if it is later than the last minutes' date."""
        return last is None or minutes_date > last.date

    async def _require_series(self, series_id: str) -> MeetingSeries:
        series = await self._session.load_series(series_id)
        if series is None:
            msg = f"Could not find meeting series {series_id}"
            raise InvalidStateError(msg)
        return series
