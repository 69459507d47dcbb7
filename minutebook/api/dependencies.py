"""Request-scoped dependencies built from app state.

Repositories and services live in ``app.state`` (set up by the
lifespan). Aggregates are loaded through one AggregateSession per
request so every topic of a request shares its parent instance.
"""

from fastapi import Depends, Header, Request

from minutebook.aggregates.session import AggregateSession
from minutebook.events.bus import EventBus
from minutebook.identity.user_directory import UserDirectory
from minutebook.output.renderer import MinutesRenderer
from minutebook.repositories.users_repo import UsersRepository
from minutebook.services.broadcast import BroadcastService
from minutebook.workflow.edit_lock import EditLockService
from minutebook.workflow.finalizer import Finalizer
from minutebook.workflow.minutes_workflow import MinutesWorkflow


def get_current_user(x_user_id: str = Header(..., alias="X-User-Id")) -> str:
    """Acting user id; authentication happens in front of this service."""
    return x_user_id


def get_event_bus(request: Request) -> EventBus | None:
    """Dependency to get EventBus from app state."""
    return getattr(request.app.state, "event_bus", None)


def get_users_repo(request: Request) -> UsersRepository:
    return request.app.state.users_repo


def get_user_directory(request: Request) -> UserDirectory:
    return UserDirectory(request.app.state.users_repo)


def get_broadcast_service(request: Request) -> BroadcastService:
    return request.app.state.broadcast_service


def get_renderer(request: Request) -> MinutesRenderer:
    return request.app.state.renderer


def get_session(request: Request) -> AggregateSession:
    """Fresh identity map for this request."""
    state = request.app.state
    return AggregateSession(state.series_repo, state.minutes_repo, state.topics_repo)


def get_workflow(
    session: AggregateSession = Depends(get_session),
    event_bus: EventBus | None = Depends(get_event_bus),
) -> MinutesWorkflow:
    return MinutesWorkflow(session, event_bus)


def get_finalizer(
    request: Request,
    session: AggregateSession = Depends(get_session),
    event_bus: EventBus | None = Depends(get_event_bus),
) -> Finalizer:
    """Finalizer using the moderator check configured in app state, if any."""
    return Finalizer(
        session,
        request.app.state.users_repo,
        event_bus=event_bus,
        is_moderator=getattr(request.app.state, "is_moderator", None),
    )


def get_edit_lock(session: AggregateSession = Depends(get_session)) -> EditLockService:
    return EditLockService(session)
