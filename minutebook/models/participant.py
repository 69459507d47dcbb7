"""Participants of a single minutes document."""

from pydantic import BaseModel, Field


class Participant(BaseModel):
    """A series member and their attendance in one meeting."""

    user_id: str = Field(description="Id of the participating user")
    present: bool = Field(default=False)
    minute_keeper: bool = Field(default=False)
