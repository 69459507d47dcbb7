"""Minutes endpoints: topics, items, finalize workflow, search and export."""

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse, PlainTextResponse
from pydantic import BaseModel, Field

from minutebook.aggregates.minutes import Minutes
from minutebook.aggregates.session import AggregateSession
from minutebook.aggregates.topic import Topic
from minutebook.api.dependencies import (
    get_current_user,
    get_finalizer,
    get_renderer,
    get_session,
    get_user_directory,
    get_workflow,
)
from minutebook.config import settings
from minutebook.identity.user_directory import UserDirectory
from minutebook.models.minutes import MinutesDoc
from minutebook.models.topic import InfoItemDoc, ItemType, TopicDoc
from minutebook.output.renderer import MinutesRenderer
from minutebook.output.schemas import MinutesContext
from minutebook.search.items_filter import ItemsFilter
from minutebook.search.keywords import ITEM_KEYWORDS
from minutebook.search.query_parser import QueryParser
from minutebook.workflow.finalizer import Finalizer, compile_finalized_info
from minutebook.workflow.minutes_workflow import MinutesWorkflow

router = APIRouter(prefix="/minutes", tags=["minutes"])


class TopicRequest(BaseModel):
    """Request body for adding a topic."""

    subject: str
    responsibles: list[str] = Field(default_factory=list)
    labels: list[str] = Field(default_factory=list)
    insert_top: bool = True


class ItemRequest(BaseModel):
    """Request body for adding or replacing an item.

    Priority and due date are validated by the item document, so an
    out-of-range priority is answered with 422.
    """

    id: str | None = None
    item_type: ItemType = ItemType.INFO_ITEM
    subject: str
    labels: list[str] = Field(default_factory=list)
    responsibles: list[str] = Field(default_factory=list)
    priority: int | None = None
    duedate: str | None = None
    is_open: bool | None = None


class FinalizedInfoResponse(BaseModel):
    minutes_id: str
    info: str
    is_finalized: bool
    version: int
    history: list[str]
    can_unfinalize: bool


async def _require_minutes(session: AggregateSession, minutes_id: str) -> Minutes:
    minutes = await session.load_minutes(minutes_id)
    if minutes is None:
        raise HTTPException(status_code=404, detail=f"Minutes {minutes_id} not found")
    return minutes


@router.get("/{minutes_id}", response_model=MinutesDoc)
async def get_minutes(
    minutes_id: str, session: AggregateSession = Depends(get_session)
) -> MinutesDoc:
    minutes = await _require_minutes(session, minutes_id)
    return minutes.doc


@router.delete("/{minutes_id}")
async def remove_minutes(
    minutes_id: str,
    user_id: str = Depends(get_current_user),
    workflow: MinutesWorkflow = Depends(get_workflow),
) -> dict:
    """Remove minutes that are not finalized."""
    if not await workflow.remove_minutes(minutes_id, actor_id=user_id):
        raise HTTPException(status_code=404, detail=f"Minutes {minutes_id} not found")
    return {"removed": minutes_id}


@router.post("/{minutes_id}/topics", response_model=TopicDoc, status_code=201)
async def add_topic(
    minutes_id: str,
    body: TopicRequest,
    user_id: str = Depends(get_current_user),
    session: AggregateSession = Depends(get_session),
) -> TopicDoc:
    minutes = await _require_minutes(session, minutes_id)
    topic_doc = TopicDoc(
        subject=body.subject, responsibles=body.responsibles, labels=body.labels
    )
    await minutes.upsert_topic(topic_doc, insert_placement_top=body.insert_top)
    return topic_doc


@router.delete("/{minutes_id}/topics/{topic_id}")
async def remove_topic(
    minutes_id: str,
    topic_id: str,
    session: AggregateSession = Depends(get_session),
) -> dict:
    minutes = await _require_minutes(session, minutes_id)
    if not await minutes.remove_topic(topic_id):
        raise HTTPException(status_code=404, detail=f"Topic {topic_id} not found")
    return {"removed": topic_id}


@router.post("/{minutes_id}/topics/{topic_id}/toggle-state", response_model=TopicDoc)
async def toggle_topic_state(
    minutes_id: str,
    topic_id: str,
    session: AggregateSession = Depends(get_session),
) -> TopicDoc:
    """Close an open topic or reopen a closed one."""
    await _require_minutes(session, minutes_id)
    topic = Topic(minutes_id, topic_id, lookup=session)
    topic.toggle_state()
    await topic.save()
    return topic.doc


@router.post("/{minutes_id}/topics/{topic_id}/items", response_model=InfoItemDoc)
async def upsert_item(
    minutes_id: str,
    topic_id: str,
    body: ItemRequest,
    user_id: str = Depends(get_current_user),
    session: AggregateSession = Depends(get_session),
) -> InfoItemDoc:
    """Add an item to a topic, or replace the item with the same id."""
    await _require_minutes(session, minutes_id)
    topic = Topic(minutes_id, topic_id, lookup=session)
    data = body.model_dump(exclude_none=True)
    data.setdefault("created_by", user_id)
    item_id = await topic.upsert_info_item(data)
    item = topic.find_info_item(item_id)
    return item.doc


@router.delete("/{minutes_id}/topics/{topic_id}/items/{item_id}")
async def remove_item(
    minutes_id: str,
    topic_id: str,
    item_id: str,
    session: AggregateSession = Depends(get_session),
) -> dict:
    await _require_minutes(session, minutes_id)
    topic = Topic(minutes_id, topic_id, lookup=session)
    if not await topic.remove_info_item(item_id):
        raise HTTPException(status_code=404, detail=f"Item {item_id} not found")
    return {"removed": item_id}


@router.get("/{minutes_id}/items", response_model=list[InfoItemDoc])
async def search_items(
    minutes_id: str,
    q: str = Query(default="", description="Item search query"),
    user_id: str = Depends(get_current_user),
    session: AggregateSession = Depends(get_session),
    directory: UserDirectory = Depends(get_user_directory),
) -> list[InfoItemDoc]:
    """Items of all topics of the minutes, filtered by a search query."""
    minutes = await _require_minutes(session, minutes_id)
    items = [item for topic in minutes.topics for item in topic.info_items]
    if not q.strip():
        return items

    series = await session.load_series(minutes.meeting_series_id)
    parser = QueryParser(
        ITEM_KEYWORDS,
        query_label_ids_by_name=series.get_label_ids_by_name if series else None,
        query_user_id_by_name=directory.query_user_ids_by_name,
        current_user_id=user_id,
    )
    await parser.parse_async(q)
    return ItemsFilter().filter(items, parser)


@router.post("/{minutes_id}/finalize", response_model=MinutesDoc)
async def finalize_minutes(
    minutes_id: str,
    user_id: str = Depends(get_current_user),
    finalizer: Finalizer = Depends(get_finalizer),
) -> MinutesDoc:
    return await finalizer.finalize(minutes_id, user_id)


@router.post("/{minutes_id}/unfinalize", response_model=MinutesDoc)
async def unfinalize_minutes(
    minutes_id: str,
    user_id: str = Depends(get_current_user),
    finalizer: Finalizer = Depends(get_finalizer),
) -> MinutesDoc:
    return await finalizer.unfinalize(minutes_id, user_id)


@router.get("/{minutes_id}/finalized-info", response_model=FinalizedInfoResponse)
async def finalized_info(
    minutes_id: str,
    session: AggregateSession = Depends(get_session),
    finalizer: Finalizer = Depends(get_finalizer),
) -> FinalizedInfoResponse:
    minutes = await _require_minutes(session, minutes_id)
    return FinalizedInfoResponse(
        minutes_id=minutes_id,
        info=compile_finalized_info(minutes.doc),
        is_finalized=minutes.is_finalized,
        version=minutes.doc.finalized_version,
        history=minutes.doc.finalized_history,
        can_unfinalize=await finalizer.is_unfinalize_minutes_allowed(minutes_id),
    )


@router.get("/{minutes_id}/export")
async def export_minutes(
    minutes_id: str,
    format: Literal["markdown", "html"] = Query(default="markdown"),
    session: AggregateSession = Depends(get_session),
    directory: UserDirectory = Depends(get_user_directory),
    renderer: MinutesRenderer = Depends(get_renderer),
) -> PlainTextResponse:
    """Render the minutes as a Markdown or HTML document."""
    if not settings.enable_doc_generation:
        raise HTTPException(status_code=404, detail="Document generation is disabled")

    minutes = await _require_minutes(session, minutes_id)
    series = await session.load_series(minutes.meeting_series_id)
    if series is None:
        raise HTTPException(status_code=404, detail="Meeting series not found")

    user_ids = [p.user_id for p in minutes.doc.participants]
    for topic in minutes.topics:
        user_ids.extend(topic.responsibles)
        for item in topic.info_items:
            user_ids.extend(item.responsibles)
    users = await directory.users_by_ids(list(dict.fromkeys(user_ids)))

    context = MinutesContext.from_minutes(
        minutes.doc, series.doc, users, finalized_info=compile_finalized_info(minutes.doc)
    )
    if format == "html":
        return HTMLResponse(renderer.render_html(context))
    return PlainTextResponse(renderer.render_markdown(context), media_type="text/markdown")
