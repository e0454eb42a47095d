"""REST API routes for users and their exercise logs."""

from json import JSONDecodeError
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from models.database import ExerciseStore, get_store
from schemas.exercise import ErrorResponse, ExerciseCreate, ExerciseLog, ExerciseOut
from schemas.user import UserCreate, UserOut
from services.exercise_service import ExerciseService, UserNotFoundError
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api", tags=["api"])

ERROR_RESPONSES = {500: {"model": ErrorResponse, "description": "Store failure"}}


def get_exercise_service(store: ExerciseStore = Depends(get_store)) -> ExerciseService:
    """Provide the service bound to the application's store."""
    return ExerciseService(store)


async def read_body(request: Request) -> Dict[str, Any]:
    """Read a JSON or form-encoded request body into a dict."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    raw = await request.body()
    if not raw:
        return {}
    try:
        data = await request.json()
    except (JSONDecodeError, UnicodeDecodeError):
        logger.warning(f"Ignoring unparsable body on {request.url.path}")
        return {}
    return data if isinstance(data, dict) else {}


@router.post("/users", response_model=UserOut, responses=ERROR_RESPONSES)
async def create_user(
    body: Dict[str, Any] = Depends(read_body),
    service: ExerciseService = Depends(get_exercise_service),
):
    """Create a new user."""
    try:
        payload = UserCreate(**body)
        return await service.create_user(payload.username)
    except Exception as e:
        logger.error(f"Error creating user: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error creating user")


@router.get("/users", response_model=List[UserOut], responses=ERROR_RESPONSES)
async def list_users(service: ExerciseService = Depends(get_exercise_service)):
    """List every user in store order."""
    try:
        return await service.list_users()
    except Exception as e:
        logger.error(f"Error fetching users: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error fetching users")


@router.post(
    "/users/{user_id}/exercises",
    response_model=ExerciseOut,
    responses={**ERROR_RESPONSES, 404: {"model": ErrorResponse}},
)
async def add_exercise(
    user_id: str,
    body: Dict[str, Any] = Depends(read_body),
    service: ExerciseService = Depends(get_exercise_service),
):
    """
    Add an exercise to a user's log.
    The returned ``_id`` is the user's id, not the exercise's.
    """
    try:
        payload = ExerciseCreate(**body)
        return await service.add_exercise(user_id, payload)
    except UserNotFoundError:
        raise
    except Exception as e:
        logger.error(f"Error adding exercise for user {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error adding exercise")


@router.get(
    "/users/{user_id}/logs",
    response_model=ExerciseLog,
    responses={**ERROR_RESPONSES, 404: {"model": ErrorResponse}},
)
async def get_logs(
    user_id: str,
    date_from: Optional[str] = Query(None, alias="from", description="Earliest date to include"),
    date_to: Optional[str] = Query(None, alias="to", description="Latest date to include"),
    limit: Optional[str] = Query(None, description="Maximum number of entries"),
    service: ExerciseService = Depends(get_exercise_service),
):
    """Get a user's exercise log, optionally bounded by date and count."""
    try:
        return await service.get_log(user_id, date_from, date_to, limit)
    except UserNotFoundError:
        raise
    except Exception as e:
        logger.error(f"Error fetching logs for user {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error fetching logs")
