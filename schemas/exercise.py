"""Exercise collection schema."""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from utils.helpers import to_number

Duration = Optional[Union[int, float]]


class ExerciseCreate(BaseModel):
    """Body of an add-exercise request.

    Values are coerced rather than rejected: ``duration`` follows the
    numeric conversion of form input (``"30"`` -> ``30``, ``"abc"`` -> ``None``)
    and ``date`` is kept as the raw string, parsed later.
    """
    model_config = ConfigDict(extra="ignore")

    description: Optional[str] = Field(None, description="What the exercise was")
    duration: Duration = Field(None, description="Duration in minutes")
    date: Optional[str] = Field(None, description="Any date-parsable string, defaults to today")

    @field_validator("description", mode="before")
    @classmethod
    def _stringify_description(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return str(value)

    @field_validator("duration", mode="before")
    @classmethod
    def _coerce_duration(cls, value: Any) -> Duration:
        return to_number(value)

    @field_validator("date", mode="before")
    @classmethod
    def _stringify_date(cls, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        return str(value)


class Exercise(BaseModel):
    """Exercise document as stored in the ``exercises`` collection."""
    userId: str = Field(..., description="Identifier of the owning user")
    description: Optional[str] = Field(None, description="What the exercise was")
    duration: Duration = Field(None, description="Duration in minutes")
    date: str = Field(..., description="Date formatted like 'Mon Jan 01 1990'")


class ExerciseOut(BaseModel):
    """Response of an add-exercise request; ``_id`` is the user's id."""
    model_config = ConfigDict(populate_by_name=True)

    username: str
    description: Optional[str] = None
    duration: Duration = None
    date: str
    id: str = Field(..., alias="_id")


class LogEntry(BaseModel):
    """One entry of a user's exercise log."""
    description: Optional[str] = None
    duration: Duration = None
    date: str


class ExerciseLog(BaseModel):
    """A user's filtered exercise log."""
    model_config = ConfigDict(populate_by_name=True)

    username: str
    count: int
    id: str = Field(..., alias="_id")
    log: List[LogEntry] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error payload, used for both soft and hard errors."""
    error: str
