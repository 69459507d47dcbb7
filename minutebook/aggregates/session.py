"""Identity map of loaded parents.

Topics may name their parent by id. The session resolves such ids to the
minutes or series aggregate that was loaded through it, so that every
topic of one request shares the same parent instance.
"""

from minutebook.aggregates.meeting_series import MeetingSeries
from minutebook.aggregates.minutes import Minutes
from minutebook.aggregates.parents import TopicParent
from minutebook.repositories.meeting_series_repo import MeetingSeriesRepository
from minutebook.repositories.minutes_repo import MinutesRepository
from minutebook.repositories.topics_repo import TopicsRepository


class AggregateSession:
    """Loads aggregates and remembers them by id."""

    def __init__(
        self,
        series_repo: MeetingSeriesRepository,
        minutes_repo: MinutesRepository,
        topics_repo: TopicsRepository,
    ):
        """Initialize the session with its repositories.

        Args:
            series_repo: Meeting series repository
            minutes_repo: Minutes repository
            topics_repo: Topic ledger repository
        """
        self.series_repo = series_repo
        self.minutes_repo = minutes_repo
        self.topics_repo = topics_repo
        self._loaded: dict[str, TopicParent] = {}

    def get(self, parent_id: str) -> TopicParent | None:
        """Return an already loaded parent, or None."""
        return self._loaded.get(parent_id)

    def register(self, parent: TopicParent) -> None:
        self._loaded[parent.id] = parent

    def forget(self, parent_id: str) -> None:
        self._loaded.pop(parent_id, None)

    async def load_minutes(self, minutes_id: str) -> Minutes | None:
        """Load minutes (or return the loaded instance)."""
        loaded = self._loaded.get(minutes_id)
        if isinstance(loaded, Minutes):
            return loaded
        doc = await self.minutes_repo.get(minutes_id)
        if doc is None:
            return None
        minutes = Minutes(doc, self.minutes_repo)
        self.register(minutes)
        return minutes

    async def load_series(self, series_id: str) -> MeetingSeries | None:
        """Load a series with its ledger (or return the loaded instance)."""
        loaded = self._loaded.get(series_id)
        if isinstance(loaded, MeetingSeries):
            return loaded
        doc = await self.series_repo.get(series_id)
        if doc is None:
            return None
        ledger = await self.topics_repo.list_for_series(series_id)
        series = MeetingSeries(doc, ledger, self.series_repo, self.topics_repo)
        self.register(series)
        return series
