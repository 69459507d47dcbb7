"""MeetingSeries aggregate: series document, labels and topic ledger."""

from minutebook.helpers.sub_elements import find_index_by_id, get_element_by_id
from minutebook.models.label import LabelDoc, separate_name_and_color
from minutebook.models.meeting_series import MeetingSeriesDoc
from minutebook.models.topic import TopicDoc
from minutebook.repositories.meeting_series_repo import MeetingSeriesRepository
from minutebook.repositories.topics_repo import TopicsRepository


class MeetingSeries:
    """Wraps a series document together with its loaded topic ledger.

    Implements the topic parent capability against the ledger.
    """

    def __init__(
        self,
        doc: MeetingSeriesDoc,
        ledger: list[TopicDoc] | None = None,
        series_repo: MeetingSeriesRepository | None = None,
        topics_repo: TopicsRepository | None = None,
    ):
        """Bind the series to its ledger and repositories.

        Args:
            doc: Series document
            ledger: Ledger topics as loaded from the topics repository
            series_repo: Repository used by save()
            topics_repo: Repository used by upsert_topic()
        """
        self._doc = doc
        self._ledger = ledger if ledger is not None else []
        self._series_repo = series_repo
        self._topics_repo = topics_repo

    @property
    def id(self) -> str:
        return self._doc.id

    @property
    def minutes_id(self) -> str | None:
        return None

    @property
    def doc(self) -> MeetingSeriesDoc:
        return self._doc

    @property
    def ledger(self) -> list[TopicDoc]:
        return self._ledger

    def set_ledger(self, topics: list[TopicDoc]) -> None:
        self._ledger = topics

    async def save(self) -> None:
        if self._series_repo is not None:
            await self._series_repo.save(self._doc)

    # Ledger

    def find_topic(self, topic_id: str) -> TopicDoc | None:
        return get_element_by_id(topic_id, self._ledger)

    async def upsert_topic(self, topic_doc: TopicDoc, insert_placement_top: bool = True) -> None:
        """Insert or overwrite a ledger entry and persist it."""
        topic_doc.parent_id = self.id
        topic_doc.visible_for = list(self._doc.visible_for)
        index = find_index_by_id(topic_doc.id, self._ledger)
        if index is None:
            if insert_placement_top:
                self._ledger.insert(0, topic_doc)
            else:
                self._ledger.append(topic_doc)
        else:
            self._ledger[index] = topic_doc
        if self._topics_repo is not None:
            await self._topics_repo.upsert(self.id, topic_doc)

    # Minutes bookkeeping

    def has_minute(self, minutes_id: str) -> bool:
        return minutes_id in self._doc.minutes

    def count_minutes(self) -> int:
        return len(self._doc.minutes)

    # Labels

    def get_available_labels(self) -> list[LabelDoc]:
        return self._doc.available_labels

    def find_label(self, label_id: str) -> LabelDoc | None:
        return get_element_by_id(label_id, self._doc.available_labels)

    def find_label_by_name(self, name: str) -> LabelDoc | None:
        """Find a label by exact name; a ``#color`` suffix is ignored."""
        label_name, _color = separate_name_and_color(name)
        return get_element_by_id(label_name, self._doc.available_labels, attr="name")

    def find_labels_containing_substring(
        self, name: str, case_sensitive: bool = True
    ) -> list[LabelDoc]:
        if not case_sensitive:
            name = name.upper()
        return [
            label
            for label in self._doc.available_labels
            if name in (label.name if case_sensitive else label.name.upper())
        ]

    def get_label_ids_by_name(self, name: str) -> list[str]:
        """Ids of labels containing name, ignoring case.

        Used as the label resolver of the query parser.
        """
        return [label.id for label in self.find_labels_containing_substring(name, False)]

    def upsert_label(self, label: LabelDoc) -> str:
        """Insert a new label first, or overwrite the one with the same id."""
        index = find_index_by_id(label.id, self._doc.available_labels)
        if index is None:
            self._doc.available_labels.insert(0, label)
        else:
            self._doc.available_labels[index] = label
        return label.id

    def remove_label(self, label_id: str) -> bool:
        index = find_index_by_id(label_id, self._doc.available_labels)
        if index is None:
            return False
        del self._doc.available_labels[index]
        return True

    # Responsibles

    def add_additional_responsible(self, responsible: str) -> None:
        """Move or insert a free-text responsible to the front."""
        if responsible in self._doc.additional_responsibles:
            self._doc.additional_responsibles.remove(responsible)
        self._doc.additional_responsibles.insert(0, responsible)
