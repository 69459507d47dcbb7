"""Repository layer for data persistence.

Provides repository classes for persisting documents to the database.
Repositories encapsulate data access logic and provide a clean interface
for the aggregate and workflow layers.
"""

from minutebook.repositories.broadcast_repo import BroadcastRepository
from minutebook.repositories.meeting_series_repo import MeetingSeriesRepository
from minutebook.repositories.minutes_repo import MinutesRepository
from minutebook.repositories.topics_repo import TopicsRepository
from minutebook.repositories.users_repo import UsersRepository

__all__ = [
    "BroadcastRepository",
    "MeetingSeriesRepository",
    "MinutesRepository",
    "TopicsRepository",
    "UsersRepository",
]
