"""User and exercise operations over the document store."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId

from models.database import ExerciseStore
from schemas.exercise import Exercise, ExerciseCreate, ExerciseLog, ExerciseOut, LogEntry
from schemas.user import UserOut
from utils.helpers import normalize_date, parse_date, to_limit
from utils.logger import setup_logger

logger = setup_logger(__name__)


class UserNotFoundError(LookupError):
    """Raised when a user id does not match any stored user."""

    def __init__(self, user_id: str):
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


def filter_log(
    exercises: List[Dict[str, Any]],
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    limit: Any = None,
) -> List[Dict[str, Any]]:
    """Apply the ``from``/``to`` bounds, then keep the first ``limit`` entries.

    An unparsable bound matches nothing, and so does an entry whose stored
    date cannot be parsed once any bound is given.
    """
    if date_from:
        start = parse_date(date_from)
        exercises = [
            e for e in exercises
            if start is not None and _entry_date(e) is not None and _entry_date(e) >= start
        ]
    if date_to:
        end = parse_date(date_to)
        exercises = [
            e for e in exercises
            if end is not None and _entry_date(e) is not None and _entry_date(e) <= end
        ]

    bound = to_limit(limit)
    if bound is not None:
        exercises = exercises[:bound]
    return exercises


def _entry_date(exercise: Dict[str, Any]) -> Optional[datetime]:
    return parse_date(exercise.get("date"))


class ExerciseService:
    """Handlers' view of the store: one lookup plus one read or write each."""

    def __init__(self, store: ExerciseStore):
        self.store = store

    async def create_user(self, username: Optional[str]) -> UserOut:
        if not username:
            raise ValueError("username is required")
        doc = {"username": username}
        result = await self.store.users.insert_one(doc)
        user = UserOut(username=username, id=str(result.inserted_id))
        logger.info(f"Created user {user.id} ({username})")
        return user

    async def list_users(self) -> List[UserOut]:
        cursor = self.store.users.find({})
        users = await cursor.to_list(length=None)
        return [UserOut.from_document(u) for u in users]

    async def get_user(self, user_id: str) -> Dict[str, Any]:
        """Fetch a user document; malformed ids count as unknown."""
        if not ObjectId.is_valid(user_id):
            raise UserNotFoundError(user_id)
        user = await self.store.users.find_one({"_id": ObjectId(user_id)})
        if not user:
            raise UserNotFoundError(user_id)
        return user

    async def add_exercise(self, user_id: str, payload: ExerciseCreate) -> ExerciseOut:
        user = await self.get_user(user_id)
        owner_id = str(user["_id"])

        exercise = Exercise(
            userId=owner_id,
            description=payload.description,
            duration=payload.duration,
            date=normalize_date(payload.date),
        )
        await self.store.exercises.insert_one(exercise.model_dump())
        logger.info(f"Added exercise for user {owner_id} on {exercise.date}")

        return ExerciseOut(
            username=user["username"],
            description=exercise.description,
            duration=exercise.duration,
            date=exercise.date,
            id=owner_id,
        )

    async def get_log(
        self,
        user_id: str,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> ExerciseLog:
        user = await self.get_user(user_id)
        owner_id = str(user["_id"])

        cursor = self.store.exercises.find({"userId": owner_id})
        exercises = await cursor.to_list(length=None)
        exercises = filter_log(exercises, date_from, date_to, limit)
        logger.info(f"Retrieved {len(exercises)} log entries for user {owner_id}")

        return ExerciseLog(
            username=user["username"],
            count=len(exercises),
            id=owner_id,
            log=[
                LogEntry(
                    description=e.get("description"),
                    duration=e.get("duration"),
                    date=e["date"],
                )
                for e in exercises
            ],
        )
