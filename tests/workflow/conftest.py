"""Fixtures for workflow tests."""

import pytest

from minutebook.aggregates.session import AggregateSession
from minutebook.models.meeting_series import MeetingSeriesDoc
from minutebook.models.user import UserDoc
from minutebook.repositories.users_repo import UsersRepository
from minutebook.workflow.finalizer import Finalizer
from minutebook.workflow.minutes_workflow import MinutesWorkflow


@pytest.fixture
def workflow(session: AggregateSession) -> MinutesWorkflow:
    return MinutesWorkflow(session)


@pytest.fixture
async def moderator(users_repo: UsersRepository) -> UserDoc:
    user = UserDoc(username="jdoe", profile={"name": "Jane Doe"})
    await users_repo.save(user)
    return user


@pytest.fixture
def finalizer(session: AggregateSession, users_repo: UsersRepository) -> Finalizer:
    return Finalizer(session, users_repo)


@pytest.fixture
async def series(workflow: MinutesWorkflow) -> MeetingSeriesDoc:
    return await workflow.create_series("Apollo", "Weekly", visible_for=["u1", "u2"])
