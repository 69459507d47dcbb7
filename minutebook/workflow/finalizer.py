"""Finalizer: freezes minutes and merges them into the series ledger.

Only the last minutes of a series can be finalized or unfinalized.
Every transition appends one line to the minutes' history:

    Version 2. Finalized on 2024-05-01 10:00:00 by Jane Doe
"""

import inspect
from collections.abc import Awaitable, Callable

import structlog

from minutebook.aggregates.minutes import Minutes
from minutebook.aggregates.session import AggregateSession
from minutebook.errors import InvalidStateError, NotAllowedError, NotAuthorizedError
from minutebook.events.bus import EventBus
from minutebook.events.types import MinutesFinalized, MinutesUnfinalized
from minutebook.helpers.dates import format_datetime_iso8601_time
from minutebook.models.base import utc_now
from minutebook.models.minutes import MinutesDoc
from minutebook.repositories.users_repo import UsersRepository
from minutebook.workflow.last_minutes import refresh_last_minutes_fields
from minutebook.workflow.topics_finalizer import TopicsFinalizer

logger = structlog.get_logger()

ModeratorCheck = Callable[[str, str], bool] | Callable[[str, str], Awaitable[bool]]


def compile_finalized_info(doc: MinutesDoc) -> str:
    """Human readable description of the last finalize or unfinalize.

    Args:
        doc: Minutes document

    Returns:
        "Never finalized" if the minutes were never finalized
    """
    if doc.finalized_at is None:
        return "Never finalized"
    version = f"Version {doc.finalized_version}. " if doc.finalized_version else ""
    action = "Finalized" if doc.is_finalized else "Unfinalized"
    when = format_datetime_iso8601_time(doc.finalized_at)
    return f"{version}{action} on {when} by {doc.finalized_by}"


class Finalizer:
    """Finalizes and unfinalizes minutes.

    The moderator check is injected; without one every user may act.
    """

    def __init__(
        self,
        session: AggregateSession,
        users_repo: UsersRepository,
        event_bus: EventBus | None = None,
        is_moderator: ModeratorCheck | None = None,
    ):
        """Initialize finalizer.

        Args:
            session: Aggregate session for loading minutes and series
            users_repo: Used to resolve the acting user's display name
            event_bus: Optional bus for MinutesFinalized/MinutesUnfinalized
            is_moderator: Callable (series_id, user_id) -> bool, sync or async
        """
        self._session = session
        self._users = users_repo
        self._event_bus = event_bus
        self._is_moderator = is_moderator
        self._topics_finalizer = TopicsFinalizer(session)

    async def finalize(self, minutes_id: str, user_id: str) -> MinutesDoc:
        """Finalize minutes and merge their topics into the series ledger.

        Args:
            minutes_id: Minutes to finalize
            user_id: Acting user

        Returns:
            The finalized minutes document

        Raises:
            InvalidStateError: If the minutes do not exist, are already
                finalized or are not the last minutes of their series
            NotAuthorizedError: If the moderator check denies the user
        """
        minutes = await self._require_minutes(minutes_id)
        if minutes.is_finalized:
            msg = "The minute is already finalized"
            raise InvalidStateError(msg)

        _clear_edit_locks(minutes.doc)
        await self._check_moderator(minutes.meeting_series_id, user_id)

        series = await self._session.load_series(minutes.meeting_series_id)
        if series is None:
            msg = f"Could not find meeting series {minutes.meeting_series_id}"
            raise InvalidStateError(msg)
        last = await self._session.minutes_repo.last_minutes_of_series(series.id)
        if last is None or last.id != minutes.id:
            msg = "Only the last minutes of a series can be finalized"
            raise InvalidStateError(msg)

        # Ledger order follows the order of the finalized snapshot. The
        # minutes are saved once, after the ledger is written.
        for index, topic_doc in enumerate(minutes.topics):
            topic_doc.sort_order = index

        ledger = await self._topics_finalizer.merge_topics_for_finalize(
            series.id, minutes.doc.visible_for
        )

        doc = minutes.doc
        doc.finalized_at = utc_now()
        doc.finalized_by = await self._display_name(user_id)
        doc.is_finalized = True
        doc.finalized_version += 1
        doc.finalized_history.append(compile_finalized_info(doc))
        await minutes.save()

        await refresh_last_minutes_fields(series.doc, self._session.minutes_repo)
        await series.save()

        logger.info(
            "minutes finalized",
            minutes_id=minutes_id,
            series_id=series.id,
            version=doc.finalized_version,
            ledger_topics=len(ledger),
        )

        if self._event_bus:
            await self._event_bus.publish(
                MinutesFinalized(
                    aggregate_id=doc.id,
                    actor_id=user_id,
                    meeting_series_id=series.id,
                    version=doc.finalized_version,
                    finalized_by=doc.finalized_by or "",
                    ledger_topic_count=len(ledger),
                )
            )
        return doc

    async def unfinalize(self, minutes_id: str, user_id: str) -> MinutesDoc:
        """Reopen the last minutes of a series and roll back the ledger.

        The finalized version is kept; the next finalize increments it.

        Args:
            minutes_id: Minutes to unfinalize
            user_id: Acting user

        Returns:
            The reopened minutes document

        Raises:
            InvalidStateError: If the minutes do not exist
            NotAuthorizedError: If the moderator check denies the user
            NotAllowedError: If the minutes are not finalized or not the
                last minutes of their series
        """
        minutes = await self._require_minutes(minutes_id)
        await self._check_moderator(minutes.meeting_series_id, user_id)

        if not await self.is_unfinalize_minutes_allowed(minutes_id):
            msg = "This minutes is not allowed to be un-finalized."
            raise NotAllowedError(msg)

        series = await self._session.load_series(minutes.meeting_series_id)
        if series is None:
            msg = f"Could not find meeting series {minutes.meeting_series_id}"
            raise InvalidStateError(msg)

        ledger = await self._topics_finalizer.merge_topics_for_unfinalize(
            series.id, minutes.doc.visible_for
        )

        doc = minutes.doc
        doc.finalized_at = utc_now()
        doc.finalized_by = await self._display_name(user_id)
        doc.is_finalized = False
        doc.finalized_history.append(compile_finalized_info(doc))
        await minutes.save()

        await refresh_last_minutes_fields(series.doc, self._session.minutes_repo)
        await series.save()

        logger.info(
            "minutes unfinalized",
            minutes_id=minutes_id,
            series_id=series.id,
            version=doc.finalized_version,
            ledger_topics=len(ledger),
        )

        if self._event_bus:
            await self._event_bus.publish(
                MinutesUnfinalized(
                    aggregate_id=doc.id,
                    actor_id=user_id,
                    meeting_series_id=series.id,
                    version=doc.finalized_version,
                    unfinalized_by=doc.finalized_by or "",
                )
            )
        return doc

    async def finalized_info(self, minutes_id: str) -> str:
        """Describe the last finalize or unfinalize of minutes.

        Raises:
            InvalidStateError: If the minutes do not exist
        """
        minutes = await self._require_minutes(minutes_id)
        return compile_finalized_info(minutes.doc)

    async def is_unfinalize_minutes_allowed(self, minutes_id: str) -> bool:
        """True if the minutes are finalized and the last of their series."""
        minutes = await self._session.load_minutes(minutes_id)
        if minutes is None or not minutes.is_finalized:
            return False
        last = await self._session.minutes_repo.last_minutes_of_series(
            minutes.meeting_series_id
        )
        return last is not None and last.id == minutes.id

    async def _require_minutes(self, minutes_id: str) -> Minutes:
        minutes = await self._session.load_minutes(minutes_id)
        if minutes is None:
            msg = f"Could not find minutes {minutes_id}"
            raise InvalidStateError(msg)
        return minutes

    async def _check_moderator(self, series_id: str, user_id: str) -> None:
        if self._is_moderator is None:
            return
        allowed = self._is_moderator(series_id, user_id)
        if inspect.isawaitable(allowed):
            allowed = await allowed
        if not allowed:
            logger.warning("moderator check denied", series_id=series_id, user_id=user_id)
            msg = f"User {user_id} is not a moderator of series {series_id}"
            raise NotAuthorizedError(msg)

    async def _display_name(self, user_id: str) -> str:
        user = await self._users.get(user_id)
        if user is None:
            return f"Unknown ({user_id})"
        return user.profile_name_with_fallback()


def _clear_edit_locks(doc: MinutesDoc) -> None:
    for topic_doc in doc.topics:
        topic_doc.clear_edit_lock()
        for item_doc in topic_doc.info_items:
            item_doc.clear_edit_lock()
            for detail in item_doc.details:
                detail.clear_edit_lock()
