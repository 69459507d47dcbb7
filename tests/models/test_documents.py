"""Tests for document models and their defaults."""

import pytest
from pydantic import ValidationError

from minutebook.config import settings
from minutebook.helpers.dates import current_date_plus_delta_days
from minutebook.models import (
    BroadcastMessageDoc,
    DetailDoc,
    InfoItemDoc,
    ItemType,
    LabelDoc,
    MeetingSeriesDoc,
    MinutesDoc,
    TopicDoc,
    UserDoc,
    UserEmail,
)
from minutebook.models.base import is_generated_id, new_id
from minutebook.models.label import separate_name_and_color


class TestIds:
    """Tests for the shared id scheme."""

    def test_new_id_is_hex_and_unique(self) -> None:
        first, second = new_id(), new_id()
        assert len(first) == 32
        int(first, 16)
        assert first != second

    def test_is_generated_id(self) -> None:
        assert is_generated_id(new_id())
        assert not is_generated_id("u-jane")
        assert not is_generated_id("jane@example.com")

    def test_sub_documents_get_ids(self) -> None:
        """Topics, items and details all receive ids."""
        topic = TopicDoc(
            subject="Budget",
            info_items=[InfoItemDoc(subject="Note", details=[DetailDoc(text="x")])],
        )
        assert topic.id
        assert topic.info_items[0].id
        assert topic.info_items[0].details[0].id


class TestTopicDoc:
    """Tests for topic defaults and open action detection."""

    def test_defaults(self) -> None:
        topic = TopicDoc(subject="Budget")
        assert topic.is_open is True
        assert topic.is_new is True
        assert topic.is_recurring is False
        assert topic.is_skipped is False
        assert topic.labels == []

    def test_has_open_action_item(self) -> None:
        """True iff one item is an action item with is_open True."""
        info = InfoItemDoc(subject="info")
        closed = InfoItemDoc(subject="closed", item_type=ItemType.ACTION_ITEM, is_open=False)
        opened = InfoItemDoc(subject="open", item_type=ItemType.ACTION_ITEM)

        assert not TopicDoc(subject="t", info_items=[info]).has_open_action_item()
        assert not TopicDoc(subject="t", info_items=[info, closed]).has_open_action_item()
        assert TopicDoc(subject="t", info_items=[closed, opened]).has_open_action_item()


class TestInfoItemDoc:
    """Tests for item type dependent defaults."""

    def test_info_item_leaves_action_fields_unset(self) -> None:
        item = InfoItemDoc(subject="Note")
        assert item.item_type is ItemType.INFO_ITEM
        assert item.is_open is None
        assert item.priority is None
        assert item.duedate is None
        assert not item.is_action_item

    def test_action_item_defaults(self) -> None:
        """Action items are open, default priority, due in a week."""
        item = InfoItemDoc(subject="Do it", item_type="actionItem")
        assert item.is_action_item
        assert item.is_open is True
        assert item.priority == settings.default_action_item_priority
        assert item.duedate == current_date_plus_delta_days(settings.action_item_due_days)

    def test_explicit_values_are_kept(self) -> None:
        item = InfoItemDoc(
            subject="Do it",
            item_type=ItemType.ACTION_ITEM,
            is_open=False,
            priority=1,
            duedate="2024-01-01",
        )
        assert item.is_open is False
        assert item.priority == 1
        assert item.duedate == "2024-01-01"

    @pytest.mark.parametrize("priority", [0, 6, -1])
    def test_priority_out_of_range(self, priority: int) -> None:
        with pytest.raises(ValidationError):
            InfoItemDoc(subject="x", item_type=ItemType.ACTION_ITEM, priority=priority)

    def test_json_round_trip_keeps_item_type(self) -> None:
        item = InfoItemDoc(subject="Do it", item_type=ItemType.ACTION_ITEM)
        restored = InfoItemDoc.model_validate_json(item.model_dump_json())
        assert restored == item


class TestLabelDoc:
    """Tests for label name/color handling."""

    def test_default_color(self) -> None:
        label = LabelDoc(name="Urgent")
        assert label.color == settings.default_label_color

    def test_name_with_color_suffix_is_split(self) -> None:
        label = LabelDoc(name="Needs review#ff0000")
        assert label.name == "Needs review"
        assert label.color == "#ff0000"

    def test_separate_name_and_color_without_color(self) -> None:
        assert separate_name_and_color("plain") == ("plain", None)
        assert separate_name_and_color("short#abc") == ("short", "#abc")

    def test_invalid_color_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Label color must be a valid hex code"):
            LabelDoc(name="Bad", color="blue")

    def test_dark_background(self) -> None:
        assert LabelDoc(name="a", color="#000000").has_dark_background
        assert not LabelDoc(name="a", color="#ffffff").has_dark_background


class TestOtherDocuments:
    """Tests for minutes, series, user and broadcast documents."""

    def test_minutes_defaults(self) -> None:
        minutes = MinutesDoc(meeting_series_id="s1")
        assert minutes.is_finalized is False
        assert minutes.finalized_version == 0
        assert minutes.finalized_history == []
        assert minutes.date == current_date_plus_delta_days()

    def test_series_defaults(self) -> None:
        series = MeetingSeriesDoc(project="P", name="Weekly")
        assert series.minutes == []
        assert series.last_minutes_id is None
        assert series.is_edited_by is None

    def test_user_profile_name_fallback(self) -> None:
        assert UserDoc(username="jdoe").profile_name_with_fallback() == "jdoe"
        user = UserDoc(username="jdoe", profile={"name": "Jane Doe"})
        assert user.profile_name_with_fallback() == "Jane Doe"

    def test_user_email_validated(self) -> None:
        with pytest.raises(ValidationError):
            UserEmail(address="not-an-email")

    def test_broadcast_defaults(self) -> None:
        message = BroadcastMessageDoc(text="Maintenance tonight")
        assert message.is_active is True
        assert message.dismiss_for_user_ids == []
