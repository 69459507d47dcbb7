"""Tests for rendering minutes as Markdown and HTML."""

from pathlib import Path

import pytest

from minutebook.models.label import LabelDoc
from minutebook.models.meeting_series import MeetingSeriesDoc
from minutebook.models.minutes import MinutesDoc
from minutebook.models.participant import Participant
from minutebook.models.topic import DetailDoc, InfoItemDoc, ItemType, TopicDoc
from minutebook.models.user import UserDoc
from minutebook.output.renderer import MinutesRenderer, TemplateNotFound
from minutebook.output.schemas import MinutesContext


@pytest.fixture
def jane() -> UserDoc:
    return UserDoc(username="jdoe", profile={"name": "Jane Doe"})


@pytest.fixture
def context(jane: UserDoc) -> MinutesContext:
    urgent = LabelDoc(name="Urgent")
    series = MeetingSeriesDoc(project="Apollo", name="Weekly", available_labels=[urgent])
    minutes = MinutesDoc(
        meeting_series_id=series.id,
        date="2024-05-01",
        participants=[
            Participant(user_id=jane.id, present=True),
            Participant(user_id="absent", present=False),
        ],
        participants_additional="Guest",
        global_note="Bring <slides>",
        topics=[
            TopicDoc(
                subject="Budget",
                labels=[urgent.id, "deleted-label"],
                responsibles=[jane.id],
                info_items=[
                    InfoItemDoc(
                        subject="Send report",
                        item_type=ItemType.ACTION_ITEM,
                        responsibles=[jane.id, "ext@example.com"],
                        priority=2,
                        duedate="2024-05-08",
                        details=[
                            DetailDoc(text="Draft ready", date="2024-05-01"),
                            DetailDoc(text=""),
                        ],
                    ),
                    InfoItemDoc(subject="Numbers look good"),
                ],
            ),
            TopicDoc(subject="Hidden", is_skipped=True),
            TopicDoc(subject="Retro", is_open=False, is_recurring=True),
        ],
    )
    return MinutesContext.from_minutes(
        minutes, series, [jane], finalized_info="Version 1. Finalized on x by Jane Doe"
    )


class TestMinutesContext:
    """Tests for MinutesContext.from_minutes."""

    def test_names_and_labels_resolved(self, context: MinutesContext) -> None:
        assert context.project == "Apollo"
        assert context.participants == ["Jane Doe"]
        budget = context.topics[0]
        assert budget.labels == ["Urgent"]
        assert budget.responsibles == ["Jane Doe"]
        assert budget.items[0].responsibles == ["Jane Doe", "ext@example.com"]

    def test_skipped_topics_and_empty_details_left_out(self, context: MinutesContext) -> None:
        assert [t.subject for t in context.topics] == ["Budget", "Retro"]
        assert [d.text for d in context.topics[0].items[0].details] == ["Draft ready"]


class TestMinutesRenderer:
    """Tests for MinutesRenderer."""

    def test_markdown(self, context: MinutesContext) -> None:
        markdown = MinutesRenderer().render_markdown(context)

        assert markdown.startswith("# Apollo: Weekly")
        assert "**Date:** 2024-05-01" in markdown
        assert "**Status:** Version 1. Finalized on x by Jane Doe" in markdown
        assert "- Jane Doe" in markdown
        assert "### 1. Budget" in markdown
        assert "#Urgent" in markdown
        assert (
            "- [ ] **Send report** (Prio 2, due 2024-05-08, Jane Doe, ext@example.com)"
            in markdown
        )
        assert "  - 2024-05-01: Draft ready" in markdown
        assert "- Numbers look good" in markdown
        assert "### 2. Retro (closed) (recurring)" in markdown
        assert "Hidden" not in markdown

    def test_html_is_escaped(self, context: MinutesContext) -> None:
        html = MinutesRenderer().render_html(context)
        assert "<h1>Apollo: Weekly</h1>" in html
        assert "Bring &lt;slides&gt;" in html
        assert 'class="action-item"' in html

    def test_render_both(self, context: MinutesContext) -> None:
        rendered = MinutesRenderer().render(context)
        assert rendered.minutes_id == context.minutes_id
        assert rendered.template_used == "minutes"
        assert rendered.markdown.startswith("# Apollo")
        assert rendered.html.startswith("<!DOCTYPE html>")

    def test_no_topics(self) -> None:
        context = MinutesContext(
            minutes_id="m1", project="P", series_name="S", date="2024-01-01"
        )
        markdown = MinutesRenderer().render_markdown(context)
        assert "_No topics._" in markdown
        assert "_No participants recorded._" in markdown

    def test_custom_template_dir(self, tmp_path: Path, context: MinutesContext) -> None:
        (tmp_path / "short.md.j2").write_text("{{ series_name }} on {{ date }}")
        renderer = MinutesRenderer(template_dir=tmp_path)
        assert renderer.render_markdown(context, "short") == "Weekly on 2024-05-01"

    def test_missing_template(self, tmp_path: Path, context: MinutesContext) -> None:
        with pytest.raises(TemplateNotFound):
            MinutesRenderer(template_dir=tmp_path).render_markdown(context)
