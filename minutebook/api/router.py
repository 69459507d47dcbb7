"""API router aggregation."""

from fastapi import APIRouter

from minutebook.api.broadcast import router as broadcast_router
from minutebook.api.health import router as health_router
from minutebook.api.meeting_series import router as meeting_series_router
from minutebook.api.minutes import router as minutes_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(meeting_series_router)
api_router.include_router(minutes_router)
api_router.include_router(broadcast_router)
