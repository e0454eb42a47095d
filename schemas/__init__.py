"""Collection and request/response schemas."""

from schemas.user import UserCreate, UserOut
from schemas.exercise import (
    ErrorResponse,
    Exercise,
    ExerciseCreate,
    ExerciseLog,
    ExerciseOut,
    LogEntry,
)

__all__ = [
    "UserCreate",
    "UserOut",
    "Exercise",
    "ExerciseCreate",
    "ExerciseOut",
    "LogEntry",
    "ExerciseLog",
    "ErrorResponse",
]
