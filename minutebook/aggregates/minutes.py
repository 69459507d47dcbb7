"""Minutes aggregate: a minutes document and its topic snapshot."""

from minutebook.aggregates.info_item import ActionItem
from minutebook.aggregates.topic import Topic
from minutebook.errors import InvalidStateError
from minutebook.helpers.strings import extract_email_addresses
from minutebook.helpers.sub_elements import find_index_by_id
from minutebook.models.minutes import MinutesDoc
from minutebook.models.participant import Participant
from minutebook.models.topic import TopicDoc
from minutebook.models.user import UserDoc
from minutebook.repositories.minutes_repo import MinutesRepository


class Minutes:
    """Wraps a minutes document; implements the topic parent capability."""

    def __init__(self, doc: MinutesDoc, repo: MinutesRepository | None = None):
        """Bind a document to its repository.

        Args:
            doc: Minutes document
            repo: Repository used by save(); in-memory only if None
        """
        self._doc = doc
        self._repo = repo

    @property
    def id(self) -> str:
        return self._doc.id

    @property
    def minutes_id(self) -> str | None:
        return self._doc.id

    @property
    def doc(self) -> MinutesDoc:
        return self._doc

    @property
    def meeting_series_id(self) -> str:
        return self._doc.meeting_series_id

    @property
    def topics(self) -> list[TopicDoc]:
        return self._doc.topics

    @property
    def is_finalized(self) -> bool:
        return self._doc.is_finalized

    def check_editable(self) -> None:
        """Raise InvalidStateError if these minutes are finalized."""
        if self._doc.is_finalized:
            msg = f"Minutes {self.id} are finalized and cannot be modified"
            raise InvalidStateError(msg)

    async def save(self) -> None:
        if self._repo is not None:
            await self._repo.save(self._doc)

    # Topics

    def find_topic(self, topic_id: str) -> TopicDoc | None:
        index = find_index_by_id(topic_id, self._doc.topics)
        return self._doc.topics[index] if index is not None else None

    async def upsert_topic(self, topic_doc: TopicDoc, insert_placement_top: bool = True) -> None:
        """Insert a new topic or overwrite the one with the same id.

        New topics are stamped with these minutes as their origin.

        Raises:
            InvalidStateError: If the minutes are finalized
        """
        self.check_editable()
        index = find_index_by_id(topic_doc.id, self._doc.topics)
        if index is None:
            if topic_doc.created_in_minute is None:
                topic_doc.created_in_minute = self.id
            if insert_placement_top:
                self._doc.topics.insert(0, topic_doc)
            else:
                self._doc.topics.append(topic_doc)
        else:
            self._doc.topics[index] = topic_doc
        await self.save()

    async def remove_topic(self, topic_id: str) -> bool:
        """Remove a topic.

        Returns:
            False if there is no topic with that id

        Raises:
            InvalidStateError: If the topic was created in other minutes
        """
        self.check_editable()
        index = find_index_by_id(topic_id, self._doc.topics)
        if index is None:
            return False
        if not Topic(self, self._doc.topics[index]).is_delete_allowed():
            msg = "Topics can only be deleted in the minutes they were created in"
            raise InvalidStateError(msg)
        del self._doc.topics[index]
        await self.save()
        return True

    def get_new_topics(self) -> list[TopicDoc]:
        return [t for t in self._doc.topics if t.is_new]

    def get_old_closed_topics(self) -> list[TopicDoc]:
        return [
            t
            for t in self._doc.topics
            if not t.is_new and not t.is_open and not t.has_open_action_item()
        ]

    def has_open_action_items(self) -> bool:
        return any(t.has_open_action_item() for t in self._doc.topics)

    def get_open_action_items(self, include_skipped_topics: bool = True) -> list[ActionItem]:
        result: list[ActionItem] = []
        for topic_doc in self._doc.topics:
            if topic_doc.is_skipped and not include_skipped_topics:
                continue
            topic = Topic(self, topic_doc)
            result.extend(ActionItem(topic, doc) for doc in topic.get_open_action_items())
        return result

    def get_open_topics_without_items(self) -> list[TopicDoc]:
        """Copies of open topics with their items stripped."""
        return [
            t.model_copy(update={"info_items": []}, deep=True)
            for t in self._doc.topics
            if t.is_open
        ]

    # Participants

    def generate_new_participants(self) -> list[Participant] | None:
        """Sync participants with visible_for.

        Existing participants keep their flags, new ones are absent.

        Returns:
            The new participant list if it changed, else None

        Raises:
            InvalidStateError: If the minutes are finalized
        """
        if self._doc.is_finalized:
            msg = "Participants of finalized minutes cannot be regenerated"
            raise InvalidStateError(msg)
        existing = {p.user_id: p for p in self._doc.participants}
        changed = False
        new_participants: list[Participant] = []
        for user_id in self._doc.visible_for:
            participant = existing.pop(user_id, None)
            if participant is None:
                changed = True
                participant = Participant(user_id=user_id)
            new_participants.append(participant)
        self._doc.participants = new_participants
        changed = changed or bool(existing)
        return new_participants if changed else None

    async def update_participant_present(self, user_id: str, present: bool) -> bool:
        """Set the present flag of one participant.

        Returns:
            False if the user is not a participant
        """
        for participant in self._doc.participants:
            if participant.user_id == user_id:
                participant.present = present
                await self.save()
                return True
        return False

    async def change_participants_status(self, present: bool) -> None:
        for participant in self._doc.participants:
            participant.present = present
        await self.save()

    def get_persons_informed(self) -> list[str]:
        return [*self._doc.visible_for, *self._doc.informed_users]

    def get_additional_recipient_emails(self) -> list[str]:
        """Email addresses mentioned in the additional participants text."""
        return extract_email_addresses(self._doc.participants_additional)

    def get_present_participant_names(
        self, users: list[UserDoc], max_chars: int | None = None
    ) -> str:
        """Names of present participants plus additional participants.

        Args:
            users: User documents for the participant ids
            max_chars: Truncate with "..." beyond this length
        """
        by_id = {u.id: u for u in users}
        names = [
            by_id[p.user_id].profile_name_with_fallback()
            for p in self._doc.participants
            if p.present and p.user_id in by_id
        ]
        if self._doc.participants_additional:
            names.append(self._doc.participants_additional)
        joined = "; ".join(names)
        if max_chars and len(joined) > max_chars:
            return f"{joined[:max_chars]}..."
        return joined
