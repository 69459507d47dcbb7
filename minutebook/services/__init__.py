"""Application services."""

from minutebook.services.broadcast import BroadcastService

__all__ = ["BroadcastService"]
