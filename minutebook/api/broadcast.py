"""Broadcast message endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from minutebook.api.dependencies import get_broadcast_service, get_current_user
from minutebook.models.broadcast_message import BroadcastMessageDoc
from minutebook.services.broadcast import BroadcastService

router = APIRouter(prefix="/broadcast", tags=["broadcast"])


class ShowRequest(BaseModel):
    text: str
    active: bool = True


@router.post("", response_model=BroadcastMessageDoc, status_code=201)
async def show_message(
    body: ShowRequest, service: BroadcastService = Depends(get_broadcast_service)
) -> BroadcastMessageDoc:
    return await service.show(body.text, active=body.active)


@router.get("", response_model=list[BroadcastMessageDoc])
async def active_messages(
    user_id: str = Depends(get_current_user),
    service: BroadcastService = Depends(get_broadcast_service),
) -> list[BroadcastMessageDoc]:
    """Active messages the current user has not dismissed."""
    return await service.active_for_user(user_id)


@router.get("/all", response_model=list[BroadcastMessageDoc])
async def all_messages(
    service: BroadcastService = Depends(get_broadcast_service),
) -> list[BroadcastMessageDoc]:
    return await service.list_all()


@router.post("/dismiss")
async def dismiss_messages(
    user_id: str = Depends(get_current_user),
    service: BroadcastService = Depends(get_broadcast_service),
) -> dict:
    """Hide all active messages from the current user."""
    return {"dismissed": await service.dismiss_for_user(user_id)}


@router.delete("/{message_id}")
async def remove_message(
    message_id: str, service: BroadcastService = Depends(get_broadcast_service)
) -> dict:
    if not await service.remove(message_id):
        raise HTTPException(status_code=404, detail=f"Message {message_id} not found")
    return {"removed": message_id}


@router.delete("")
async def remove_all_messages(
    service: BroadcastService = Depends(get_broadcast_service),
) -> dict:
    return {"removed": await service.remove_all()}
