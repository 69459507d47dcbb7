"""Tests for the broadcast message service."""

from minutebook.events.base import Event
from minutebook.events.bus import EventBus
from minutebook.events.types import BroadcastMessageShown
from minutebook.repositories.broadcast_repo import BroadcastRepository
from minutebook.services.broadcast import BroadcastService


class TestBroadcastService:
    """Tests for BroadcastService."""

    async def test_show_and_active_for_user(self, broadcast_repo: BroadcastRepository) -> None:
        service = BroadcastService(broadcast_repo)
        shown = await service.show("Maintenance tonight")
        await service.show("Draft", active=False)

        active = await service.active_for_user("u1")
        assert [m.id for m in active] == [shown.id]
        assert len(await service.list_all()) == 2

    async def test_dismiss_for_user(self, broadcast_repo: BroadcastRepository) -> None:
        service = BroadcastService(broadcast_repo)
        await service.show("one")
        await service.show("two")

        assert await service.dismiss_for_user("u1") == 2
        assert await service.dismiss_for_user("u1") == 0
        assert await service.active_for_user("u1") == []
        assert len(await service.active_for_user("u2")) == 2

    async def test_remove(self, broadcast_repo: BroadcastRepository) -> None:
        service = BroadcastService(broadcast_repo)
        message = await service.show("one")
        await service.show("two")

        assert await service.remove(message.id) is True
        assert await service.remove(message.id) is False
        assert await service.remove_all() == 1

    async def test_event_only_for_active_messages(
        self, broadcast_repo: BroadcastRepository
    ) -> None:
        received: list[Event] = []

        async def collect(event: Event) -> None:
            received.append(event)

        bus = EventBus()
        bus.subscribe(BroadcastMessageShown, collect)
        service = BroadcastService(broadcast_repo, bus)
        await service.show("visible")
        await service.show("hidden", active=False)

        assert [e.text for e in received] == ["visible"]
