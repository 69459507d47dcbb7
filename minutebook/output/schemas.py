"""Output schemas for meeting minutes rendering."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from minutebook.models.meeting_series import MeetingSeriesDoc
from minutebook.models.minutes import MinutesDoc
from minutebook.models.topic import InfoItemDoc, TopicDoc
from minutebook.models.user import UserDoc


class DetailData(BaseModel):
    """Detail note for template rendering."""

    date: str
    text: str


class ItemData(BaseModel):
    """Info or action item for template rendering."""

    model_config = ConfigDict(str_strip_whitespace=True)

    subject: str = Field(description="Item subject")
    is_action_item: bool = Field(default=False)
    is_open: bool = Field(default=False)
    priority: int | None = Field(default=None)
    duedate: str | None = Field(default=None)
    responsibles: list[str] = Field(default_factory=list, description="Display names")
    labels: list[str] = Field(default_factory=list, description="Label names")
    details: list[DetailData] = Field(default_factory=list)


class TopicData(BaseModel):
    """Topic for template rendering."""

    model_config = ConfigDict(str_strip_whitespace=True)

    subject: str = Field(description="Topic subject")
    is_open: bool = Field(default=True)
    is_recurring: bool = Field(default=False)
    responsibles: list[str] = Field(default_factory=list, description="Display names")
    labels: list[str] = Field(default_factory=list, description="Label names")
    items: list[ItemData] = Field(default_factory=list)


class MinutesContext(BaseModel):
    """Context data for rendering minutes templates.

    Ids are already resolved to display names and label names.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    minutes_id: str = Field(description="Minutes identifier")
    project: str = Field(description="Project of the series")
    series_name: str = Field(description="Meeting series name")
    date: str = Field(description="Meeting date (YYYY-MM-DD)")
    is_finalized: bool = Field(default=False)
    finalized_info: str = Field(default="Never finalized")
    participants: list[str] = Field(default_factory=list, description="Present participants")
    participants_additional: str = Field(default="")
    global_note: str = Field(default="")
    topics: list[TopicData] = Field(default_factory=list)
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the document was generated",
    )

    @classmethod
    def from_minutes(
        cls,
        minutes: MinutesDoc,
        series: MeetingSeriesDoc,
        users: list[UserDoc],
        finalized_info: str = "Never finalized",
    ) -> "MinutesContext":
        """Convert minutes and their series to template-friendly context.

        Skipped topics are left out. Responsibles that are not user ids
        (free-text names or emails) are shown as they are.

        Args:
            minutes: Minutes document
            series: Series the minutes belong to
            users: Users referenced by participants and responsibles
            finalized_info: Description of the last finalize

        Returns:
            MinutesContext ready for template rendering
        """
        names = {u.id: u.profile_name_with_fallback() for u in users}
        labels = {label.id: label.name for label in series.available_labels}

        def resolve(user_ids: list[str]) -> list[str]:
            return [names.get(user_id, user_id) for user_id in user_ids]

        def label_names(label_ids: list[str]) -> list[str]:
            return [labels[label_id] for label_id in label_ids if label_id in labels]

        def item_data(item: InfoItemDoc) -> ItemData:
            return ItemData(
                subject=item.subject,
                is_action_item=item.is_action_item,
                is_open=bool(item.is_open),
                priority=item.priority,
                duedate=item.duedate,
                responsibles=resolve(item.responsibles),
                labels=label_names(item.labels),
                details=[DetailData(date=d.date, text=d.text) for d in item.details if d.text],
            )

        def topic_data(topic: TopicDoc) -> TopicData:
            return TopicData(
                subject=topic.subject,
                is_open=topic.is_open,
                is_recurring=topic.is_recurring,
                responsibles=resolve(topic.responsibles),
                labels=label_names(topic.labels),
                items=[item_data(item) for item in topic.info_items],
            )

        return cls(
            minutes_id=minutes.id,
            project=series.project,
            series_name=series.name,
            date=minutes.date,
            is_finalized=minutes.is_finalized,
            finalized_info=finalized_info,
            participants=[
                names.get(p.user_id, p.user_id) for p in minutes.participants if p.present
            ],
            participants_additional=minutes.participants_additional,
            global_note=minutes.global_note,
            topics=[topic_data(t) for t in minutes.topics if not t.is_skipped],
        )


class RenderedMinutes(BaseModel):
    """Rendered minutes output."""

    minutes_id: str = Field(description="Minutes identifier")
    markdown: str = Field(description="Rendered Markdown content")
    html: str = Field(description="Rendered HTML content")
    template_used: str = Field(description="Template base name")
    rendered_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When rendering occurred",
    )
