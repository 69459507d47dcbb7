"""Tests for the InfoItem and ActionItem wrappers."""

import pytest
from pydantic import ValidationError

from minutebook.aggregates.info_item import ActionItem, InfoItem, create_info_item
from minutebook.aggregates.minutes import Minutes
from minutebook.aggregates.topic import Topic
from minutebook.config import settings
from minutebook.errors import InvalidStateError
from minutebook.models.minutes import MinutesDoc
from minutebook.models.topic import DetailDoc, InfoItemDoc, ItemType, TopicDoc


@pytest.fixture
def minutes() -> Minutes:
    return Minutes(MinutesDoc(meeting_series_id="series-1"))


@pytest.fixture
def topic(minutes: Minutes) -> Topic:
    return Topic(minutes, TopicDoc(subject="Topic"))


class TestInfoItem:
    """Tests for plain info items."""

    def test_requires_parent_topic(self) -> None:
        with pytest.raises(InvalidStateError, match="parent topic"):
            InfoItem(None, {"subject": "x"})

    def test_resolve_by_id(self, topic: Topic) -> None:
        doc = InfoItemDoc(subject="x")
        topic.doc.info_items.append(doc)
        assert InfoItem(topic, doc.id).doc is doc

    def test_unknown_id(self, topic: Topic) -> None:
        with pytest.raises(InvalidStateError, match="Could not find item"):
            InfoItem(topic, "missing")

    def test_info_item_is_never_sticky(self, topic: Topic) -> None:
        item = InfoItem(topic, {"subject": "x"})
        assert not item.is_action_item()
        assert not item.is_sticky()

    def test_details(self, topic: Topic, minutes: Minutes) -> None:
        item = InfoItem(topic, {"subject": "x"})
        detail = item.add_details(minutes.id, "first note")
        item.add_details(minutes.id, "second note")

        assert detail.created_in_minute == minutes.id
        assert [d.text for d in item.get_details()] == ["first note", "second note"]

        item.update_details(0, "edited")
        assert item.get_details()[0].text == "edited"

        item.update_details(1, "")
        assert [d.text for d in item.get_details()] == ["edited"]

    def test_update_detail_out_of_range(self, topic: Topic) -> None:
        item = InfoItem(topic, {"subject": "x"})
        with pytest.raises(IndexError):
            item.update_details(3, "text")

    def test_invalidate_is_new_flag(self, topic: Topic) -> None:
        item = InfoItem(topic, {"subject": "x", "details": [{"text": "d"}]})
        item.invalidate_is_new_flag()
        assert item.doc.is_new is False
        assert item.get_details()[0].is_new is False

    def test_delete_allowed_only_in_creating_minutes(self, topic: Topic) -> None:
        item = InfoItem(topic, {"subject": "x", "created_in_minute": "m1"})
        assert item.is_delete_allowed("m1")
        assert not item.is_delete_allowed("m2")
        assert item.is_created_in_minutes("m1")

    def test_labels(self, topic: Topic) -> None:
        item = InfoItem(topic, {"subject": "x"})
        item.add_labels_by_ids(["a", "a", "b"])
        assert item.doc.labels == ["a", "b"]
        assert item.has_label_with_id("b")

    async def test_save_goes_through_topic(self, topic: Topic, minutes: Minutes) -> None:
        item = InfoItem(topic, {"subject": "x"})
        item_id = await item.save()
        assert item_id == item.id
        assert minutes.find_topic(topic.id).info_items[0].id == item_id


class TestActionItem:
    """Tests for action items."""

    def test_dict_source_becomes_action_item(self, topic: Topic) -> None:
        item = ActionItem(topic, {"subject": "Do it"})
        assert item.is_action_item()
        assert item.doc.is_open is True
        assert item.get_priority() == settings.default_action_item_priority
        assert item.get_duedate()

    def test_promotes_info_item_doc(self, topic: Topic) -> None:
        doc = InfoItemDoc(subject="Note")
        item = ActionItem(topic, doc)
        assert doc.item_type is ItemType.ACTION_ITEM
        assert doc.is_open is True
        assert doc.priority == settings.default_action_item_priority
        assert doc.duedate is not None

    def test_sticky_while_open(self, topic: Topic) -> None:
        item = ActionItem(topic, {"subject": "Do it"})
        assert item.is_sticky()
        item.toggle_state()
        assert not item.is_sticky()

    def test_set_priority_validates(self, topic: Topic) -> None:
        item = ActionItem(topic, {"subject": "Do it"})
        item.set_priority(5)
        assert item.get_priority() == 5
        with pytest.raises(ValidationError):
            item.set_priority(9)

    def test_responsibles(self, topic: Topic) -> None:
        assert not ActionItem(topic, {"subject": "x"}).has_responsibles()
        item = ActionItem(topic, {"subject": "x", "responsibles": ["u1"]})
        assert item.has_responsibles()
        assert item.get_responsibles() == ["u1"]

    def test_detail_accessors(self, topic: Topic) -> None:
        item = ActionItem(
            topic,
            {"subject": "x", "details": [DetailDoc(text="note", date="2024-01-02")]},
        )
        assert item.get_date_from_details() == "2024-01-02"
        assert item.get_text_from_details() == "note"
        assert item.get_date_from_details(1) is None
        assert item.get_text_from_details(1) == ""


class TestCreateInfoItem:
    def test_dispatches_on_type(self, topic: Topic) -> None:
        assert isinstance(create_info_item(topic, {"subject": "x"}), InfoItem)
        assert not isinstance(create_info_item(topic, {"subject": "x"}), ActionItem)
        created = create_info_item(topic, {"subject": "x", "item_type": "actionItem"})
        assert isinstance(created, ActionItem)
