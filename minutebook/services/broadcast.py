"""Broadcast messages: admin announcements shown until dismissed."""

import structlog

from minutebook.events.bus import EventBus
from minutebook.events.types import BroadcastMessageShown
from minutebook.models.broadcast_message import BroadcastMessageDoc
from minutebook.repositories.broadcast_repo import BroadcastRepository

logger = structlog.get_logger()


class BroadcastService:
    """Publishes, dismisses and removes broadcast messages."""

    def __init__(self, repo: BroadcastRepository, event_bus: EventBus | None = None):
        """Initialize with repository.

        Args:
            repo: Broadcast message repository
            event_bus: Optional bus for BroadcastMessageShown
        """
        self._repo = repo
        self._event_bus = event_bus

    async def show(self, text: str, active: bool = True) -> BroadcastMessageDoc:
        """Store a new message; active messages are shown to every user."""
        message = BroadcastMessageDoc(text=text, is_active=active)
        await self._repo.save(message)
        logger.info("broadcast message stored", message_id=message.id, active=active)
        if self._event_bus and active:
            await self._event_bus.publish(
                BroadcastMessageShown(aggregate_id=message.id, text=message.text)
            )
        return message

    async def dismiss_for_user(self, user_id: str) -> int:
        """Hide every currently active message from one user.

        Returns:
            Number of messages newly dismissed
        """
        dismissed = 0
        for message in await self._repo.list_active():
            if user_id in message.dismiss_for_user_ids:
                continue
            message.dismiss_for_user_ids.append(user_id)
            await self._repo.save(message)
            dismissed += 1
        logger.debug("broadcast messages dismissed", user_id=user_id, count=dismissed)
        return dismissed

    async def active_for_user(self, user_id: str) -> list[BroadcastMessageDoc]:
        """Active messages the user has not dismissed."""
        return [
            message
            for message in await self._repo.list_active()
            if user_id not in message.dismiss_for_user_ids
        ]

    async def remove(self, message_id: str) -> bool:
        removed = await self._repo.remove(message_id)
        if removed:
            logger.info("broadcast message removed", message_id=message_id)
        return removed

    async def remove_all(self) -> int:
        return await self._repo.remove_all()

    async def list_all(self) -> list[BroadcastMessageDoc]:
        return await self._repo.list_all()
