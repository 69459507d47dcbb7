"""Tests for the MeetingSeries aggregate and the aggregate session."""

from minutebook.aggregates.meeting_series import MeetingSeries
from minutebook.aggregates.minutes import Minutes
from minutebook.aggregates.session import AggregateSession
from minutebook.aggregates.topic import Topic
from minutebook.models.label import LabelDoc
from minutebook.models.meeting_series import MeetingSeriesDoc
from minutebook.models.minutes import MinutesDoc
from minutebook.models.topic import TopicDoc
from minutebook.repositories.meeting_series_repo import MeetingSeriesRepository
from minutebook.repositories.minutes_repo import MinutesRepository
from minutebook.repositories.topics_repo import TopicsRepository


def make_series(**kwargs) -> MeetingSeries:
    return MeetingSeries(MeetingSeriesDoc(project="Apollo", name="Weekly", **kwargs))


class TestLabels:
    """Tests for series labels."""

    def test_upsert_inserts_first_and_replaces(self) -> None:
        series = make_series()
        first = LabelDoc(name="Urgent")
        second = LabelDoc(name="Later")
        series.upsert_label(first)
        series.upsert_label(second)
        assert [label.name for label in series.get_available_labels()] == ["Later", "Urgent"]

        series.upsert_label(LabelDoc(id=first.id, name="Very urgent"))
        assert series.find_label(first.id).name == "Very urgent"
        assert len(series.get_available_labels()) == 2

    def test_find_label_by_name_ignores_color(self) -> None:
        label = LabelDoc(name="Urgent")
        series = make_series(available_labels=[label])
        assert series.find_label_by_name("Urgent#ff0000") is label
        assert series.find_label_by_name("urgent") is None

    def test_label_ids_by_name_is_case_insensitive_substring(self) -> None:
        review = LabelDoc(name="Needs Review")
        urgent = LabelDoc(name="Urgent")
        series = make_series(available_labels=[review, urgent])
        assert series.get_label_ids_by_name("review") == [review.id]
        assert series.get_label_ids_by_name("e") == [review.id, urgent.id]
        assert series.get_label_ids_by_name("zzz") == []

    def test_case_sensitive_substring(self) -> None:
        series = make_series(available_labels=[LabelDoc(name="Urgent")])
        assert series.find_labels_containing_substring("urg") == []
        assert len(series.find_labels_containing_substring("Urg")) == 1

    def test_remove_label(self) -> None:
        label = LabelDoc(name="Urgent")
        series = make_series(available_labels=[label])
        assert series.remove_label(label.id) is True
        assert series.remove_label(label.id) is False


class TestLedger:
    """Tests for the in-memory ledger."""

    async def test_upsert_topic_sets_ledger_fields(self) -> None:
        series = make_series(visible_for=["u1", "u2"])
        topic = TopicDoc(subject="Budget")
        await series.upsert_topic(topic)

        assert series.ledger == [topic]
        assert topic.parent_id == series.id
        assert topic.visible_for == ["u1", "u2"]
        assert series.minutes_id is None

    async def test_topic_on_series_parent(self) -> None:
        series = make_series()
        topic_doc = TopicDoc(subject="Budget")
        await series.upsert_topic(topic_doc)

        topic = Topic(series, topic_doc.id)
        item_id = await topic.upsert_info_item({"subject": "note"})
        # items added on the ledger carry no minutes lineage
        assert topic.find_info_item(item_id).doc.created_in_minute is None

    def test_minutes_bookkeeping(self) -> None:
        series = make_series(minutes=["m1", "m2"])
        assert series.has_minute("m1")
        assert not series.has_minute("m3")
        assert series.count_minutes() == 2

    def test_additional_responsibles_move_to_front(self) -> None:
        series = make_series(additional_responsibles=["a@example.com", "b@example.com"])
        series.add_additional_responsible("b@example.com")
        series.add_additional_responsible("c@example.com")
        assert series.doc.additional_responsibles == [
            "c@example.com",
            "b@example.com",
            "a@example.com",
        ]


class TestAggregateSession:
    """Tests for the identity map."""

    async def test_load_series_with_ledger(
        self,
        session: AggregateSession,
        series_repo: MeetingSeriesRepository,
        topics_repo: TopicsRepository,
    ) -> None:
        doc = MeetingSeriesDoc(project="Apollo", name="Weekly")
        await series_repo.save(doc)
        await topics_repo.upsert(doc.id, TopicDoc(subject="Ledger topic"))

        series = await session.load_series(doc.id)
        assert series is not None
        assert [t.subject for t in series.ledger] == ["Ledger topic"]
        assert await session.load_series(doc.id) is series
        assert session.get(doc.id) is series

    async def test_load_minutes_returns_same_instance(
        self, session: AggregateSession, minutes_repo: MinutesRepository
    ) -> None:
        doc = MinutesDoc(meeting_series_id="s1")
        await minutes_repo.save(doc)

        minutes = await session.load_minutes(doc.id)
        assert isinstance(minutes, Minutes)
        assert await session.load_minutes(doc.id) is minutes

    async def test_missing_documents(self, session: AggregateSession) -> None:
        assert await session.load_minutes("missing") is None
        assert await session.load_series("missing") is None
        assert session.get("missing") is None

    async def test_topics_resolve_parent_through_session(
        self, session: AggregateSession, minutes_repo: MinutesRepository
    ) -> None:
        """Topics named by parent id share the loaded minutes instance."""
        doc = MinutesDoc(meeting_series_id="s1")
        await minutes_repo.save(doc)
        minutes = await session.load_minutes(doc.id)
        topic_doc = TopicDoc(subject="Shared")
        await minutes.upsert_topic(topic_doc)

        topic = Topic(doc.id, topic_doc.id, lookup=session)
        assert topic.parent is minutes

        session.forget(doc.id)
        assert session.get(doc.id) is None
