"""Meeting series endpoints: series, labels, ledger and minutes creation."""

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from minutebook.aggregates.meeting_series import MeetingSeries
from minutebook.aggregates.session import AggregateSession
from minutebook.api.dependencies import (
    get_current_user,
    get_session,
    get_user_directory,
    get_workflow,
)
from minutebook.identity.user_directory import UserDirectory
from minutebook.models.label import LabelDoc
from minutebook.models.meeting_series import MeetingSeriesDoc
from minutebook.models.minutes import MinutesDoc
from minutebook.models.topic import TopicDoc
from minutebook.search.items_filter import TopicsFilter
from minutebook.search.keywords import TOPIC_KEYWORDS
from minutebook.search.query_parser import QueryParser
from minutebook.workflow.minutes_workflow import MinutesWorkflow

router = APIRouter(prefix="/meeting-series", tags=["meeting-series"])


class CreateSeriesRequest(BaseModel):
    """Request body for creating a meeting series."""

    project: str
    name: str
    visible_for: list[str] = Field(default_factory=list)
    informed_users: list[str] = Field(default_factory=list)


class AddMinutesRequest(BaseModel):
    """Request body for adding minutes; the date defaults to the next free day."""

    date: str | None = None


class LabelRequest(BaseModel):
    """Label as ``name`` or ``name#color``."""

    name: str
    color: str | None = None
    id: str | None = None


class VisibilityRequest(BaseModel):
    visible_for: list[str]
    informed_users: list[str] | None = None


async def _require_series(session: AggregateSession, series_id: str) -> MeetingSeries:
    series = await session.load_series(series_id)
    if series is None:
        raise HTTPException(status_code=404, detail=f"Meeting series {series_id} not found")
    return series


@router.post("", response_model=MeetingSeriesDoc, status_code=201)
async def create_series(
    body: CreateSeriesRequest,
    user_id: str = Depends(get_current_user),
    workflow: MinutesWorkflow = Depends(get_workflow),
) -> MeetingSeriesDoc:
    """Create a meeting series; the creator is added to its visibility."""
    visible_for = list(body.visible_for)
    if user_id not in visible_for:
        visible_for.insert(0, user_id)
    return await workflow.create_series(
        body.project,
        body.name,
        visible_for=visible_for,
        informed_users=body.informed_users,
        actor_id=user_id,
    )


@router.get("", response_model=list[MeetingSeriesDoc])
async def list_series(
    user_id: str = Depends(get_current_user),
    session: AggregateSession = Depends(get_session),
) -> list[MeetingSeriesDoc]:
    """Series visible for the current user."""
    return await session.series_repo.list_visible_for(user_id)


@router.get("/{series_id}", response_model=MeetingSeriesDoc)
async def get_series(
    series_id: str, session: AggregateSession = Depends(get_session)
) -> MeetingSeriesDoc:
    series = await _require_series(session, series_id)
    return series.doc


@router.get("/{series_id}/topics", response_model=list[TopicDoc])
async def list_ledger_topics(
    series_id: str,
    q: str = Query(default="", description="Topic search query"),
    user_id: str = Depends(get_current_user),
    session: AggregateSession = Depends(get_session),
    directory: UserDirectory = Depends(get_user_directory),
) -> list[TopicDoc]:
    """Ledger topics of a series, optionally filtered by a search query."""
    series = await _require_series(session, series_id)
    if not q.strip():
        return series.ledger
    parser = QueryParser(
        TOPIC_KEYWORDS,
        query_label_ids_by_name=series.get_label_ids_by_name,
        query_user_id_by_name=directory.query_user_ids_by_name,
        current_user_id=user_id,
    )
    await parser.parse_async(q)
    return TopicsFilter().filter(series.ledger, parser)


@router.get("/{series_id}/minutes", response_model=list[MinutesDoc])
async def list_minutes(
    series_id: str, session: AggregateSession = Depends(get_session)
) -> list[MinutesDoc]:
    """Minutes of a series, newest first."""
    await _require_series(session, series_id)
    return await session.minutes_repo.all_minutes_of_series(series_id, newest_first=True)


@router.post("/{series_id}/minutes", response_model=MinutesDoc, status_code=201)
async def add_minutes(
    series_id: str,
    body: AddMinutesRequest | None = None,
    user_id: str = Depends(get_current_user),
    session: AggregateSession = Depends(get_session),
    workflow: MinutesWorkflow = Depends(get_workflow),
) -> MinutesDoc:
    """Add minutes carrying the open ledger topics forward."""
    await _require_series(session, series_id)
    return await workflow.add_new_minutes(
        series_id, minutes_date=body.date if body else None, actor_id=user_id
    )


@router.post("/{series_id}/labels", response_model=LabelDoc, status_code=201)
async def upsert_label(
    series_id: str,
    body: LabelRequest,
    session: AggregateSession = Depends(get_session),
) -> LabelDoc:
    """Create or update a label of the series."""
    series = await _require_series(session, series_id)
    data = body.model_dump(exclude_none=True)
    label = LabelDoc.model_validate(data)
    series.upsert_label(label)
    await series.save()
    return label


@router.delete("/{series_id}/labels/{label_id}")
async def remove_label(
    series_id: str,
    label_id: str,
    session: AggregateSession = Depends(get_session),
) -> dict:
    series = await _require_series(session, series_id)
    if not series.remove_label(label_id):
        raise HTTPException(status_code=404, detail=f"Label {label_id} not found")
    await series.save()
    return {"removed": label_id}


@router.put("/{series_id}/visibility")
async def update_visibility(
    series_id: str,
    body: VisibilityRequest,
    workflow: MinutesWorkflow = Depends(get_workflow),
    session: AggregateSession = Depends(get_session),
) -> dict:
    """Set who may see the series and propagate it to all minutes."""
    await _require_series(session, series_id)
    updated = await workflow.sync_visibility(series_id, body.visible_for, body.informed_users)
    return {"series_id": series_id, "minutes_updated": updated}
