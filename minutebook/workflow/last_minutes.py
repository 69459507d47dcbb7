"""Keeps the denormalized last-minutes fields of a series current."""

from minutebook.models.meeting_series import MeetingSeriesDoc
from minutebook.repositories.minutes_repo import MinutesRepository


async def refresh_last_minutes_fields(
    series: MeetingSeriesDoc, minutes_repo: MinutesRepository
) -> None:
    """Copy id, date and finalized flag of the series' tail minutes.

    Args:
        series: Series document to update in place (not saved)
        minutes_repo: Repository to find the last minutes
    """
    last = await minutes_repo.last_minutes_of_series(series.id)
    series.last_minutes_id = last.id if last else None
    series.last_minutes_date = last.date if last else ""
    series.last_minutes_finalized = last.is_finalized if last else False
