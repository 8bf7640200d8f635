"""
User, exercise and log endpoints for API v1.

Request bodies are accepted as JSON, as an URL‑encoded form or as
``multipart/form-data``.  Errors are reported with an
``{"error": ...}`` body:

* an unknown user is a soft error, returned with status 200;
* a validation failure is returned with status 400;
* a store failure is logged and returned with status 500.
"""

import logging
import sqlite3
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from exercise_tracker_api.app.core.db import Database, get_db
from exercise_tracker_api.app.schemas.exercise import ErrorResponse, ExerciseLog, ExerciseRead
from exercise_tracker_api.app.schemas.user import UserCreate, UserRead
from exercise_tracker_api.app.services.exercise_service import ExerciseService
from exercise_tracker_api.app.services.user_service import UserNotFoundError, UserService


logger = logging.getLogger(__name__)

router = APIRouter()

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def _error(message: str, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: ValidationError) -> str:
    """Join the messages of a pydantic error, without the ``Value error,`` prefix."""
    messages = []
    for err in exc.errors():
        cause = (err.get("ctx") or {}).get("error")
        messages.append(str(cause) if cause else f"{'.'.join(map(str, err['loc']))}: {err['msg']}")
    return "; ".join(messages)


async def request_body(request: Request) -> Dict[str, Any]:
    """Dependency returning the request body as a dictionary.

    Forms are read with ``request.form()``, everything else with
    ``request.json()``.  An empty or non‑object body yields an empty
    dictionary so the schemas report the missing fields.
    """
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(_FORM_TYPES):
        form = await request.form()
        return dict(form)
    try:
        data = await request.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def get_user_service(db: Database = Depends(get_db)) -> UserService:
    return UserService(db)


def get_exercise_service(request: Request, db: Database = Depends(get_db)) -> ExerciseService:
    return ExerciseService(db, default_limit=request.app.state.settings.default_log_limit)


@router.post(
    "",
    response_model=UserRead,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_user(
    body: Dict[str, Any] = Depends(request_body),
    users: UserService = Depends(get_user_service),
) -> Union[UserRead, JSONResponse]:
    """Register a new user from a ``username`` field."""
    try:
        data = UserCreate.model_validate(body)
    except ValidationError as e:
        return _error(_validation_message(e), status.HTTP_400_BAD_REQUEST)
    try:
        return await users.create_user(data)
    except sqlite3.Error:
        logger.exception("Could not create user")
        return _error("Could not create user", status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.get(
    "",
    response_model=List[UserRead],
    responses={500: {"model": ErrorResponse}},
)
async def list_users(
    users: UserService = Depends(get_user_service),
) -> Union[List[UserRead], JSONResponse]:
    """List every registered user."""
    try:
        return await users.list_users()
    except sqlite3.Error:
        logger.exception("Could not get users")
        return _error("Could not get users", status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.post(
    "/{user_id}/exercises",
    response_model=ExerciseRead,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def add_exercise(
    user_id: str,
    body: Dict[str, Any] = Depends(request_body),
    exercises: ExerciseService = Depends(get_exercise_service),
) -> Union[ExerciseRead, JSONResponse]:
    """Log an exercise for a user.

    The body carries ``description``, ``duration`` (minutes) and an
    optional ``date``.  An unknown user yields ``{"error": "User not
    found"}`` with status 200.
    """
    try:
        return await exercises.add_exercise(user_id, body)
    except UserNotFoundError as e:
        return _error(str(e))
    except ValidationError as e:
        return _error(_validation_message(e), status.HTTP_400_BAD_REQUEST)
    except sqlite3.Error:
        logger.exception("Could not add exercise for user %s", user_id)
        return _error("Could not add exercise", status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.get(
    "/{user_id}/logs",
    response_model=ExerciseLog,
    responses={500: {"model": ErrorResponse}},
)
async def get_log(
    user_id: str,
    date_from: Optional[str] = Query(None, alias="from", description="Earliest date, e.g. 2024-01-01"),
    date_to: Optional[str] = Query(None, alias="to", description="Latest date, inclusive"),
    limit: Optional[str] = Query(None, description="Maximum number of entries"),
    exercises: ExerciseService = Depends(get_exercise_service),
) -> Union[ExerciseLog, JSONResponse]:
    """Return a user's exercise log.

    Unparseable ``from``/``to``/``limit`` values are ignored rather than
    rejected.
    """
    try:
        return await exercises.get_log(user_id, date_from=date_from, date_to=date_to, limit=limit)
    except UserNotFoundError as e:
        return _error(str(e))
    except sqlite3.Error:
        logger.exception("Could not get logs for user %s", user_id)
        return _error("Could not get logs", status.HTTP_500_INTERNAL_SERVER_ERROR)
