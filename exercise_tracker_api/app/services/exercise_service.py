"""
Business logic for exercise entries and the exercise log.

``ExerciseService.add_exercise`` attaches a dated entry to an existing
user.  ``ExerciseService.get_log`` returns a user's entries, optionally
restricted to a date range and capped in length, ordered by date.

Input handling rules:

* The entry body is validated with ``ExerciseCreate`` only after the
  user has been found; a bad ``duration`` raises
  ``pydantic.ValidationError`` and nothing is stored.
* A missing, blank or unparseable ``date`` falls back to today's date
  at the moment the entry is written.
* ``from``/``to`` bounds that do not parse are dropped from the query;
  ``limit`` that is not a positive integer falls back to the default
  ceiling.
"""

import logging
from typing import Any, List, Mapping

from ..core.dates import format_date, parse_date, today
from ..core.db import Database
from ..schemas.exercise import ExerciseCreate, ExerciseLog, ExerciseRead, LogEntry, parse_int
from .user_service import UserService


logger = logging.getLogger(__name__)


class ExerciseService:
    """Exercise log backed by the given store handle.

    ``default_limit`` caps a log query whose ``limit`` is absent or
    unusable.
    """

    def __init__(self, db: Database, default_limit: int) -> None:
        self.db = db
        self.users = UserService(db)
        self.default_limit = default_limit

    async def add_exercise(self, user_id: Any, payload: Mapping[str, Any]) -> ExerciseRead:
        """Store a new exercise for ``user_id`` and return it.

        ``payload`` is the decoded request body.  The user is looked up
        first, so an unknown user raises ``UserNotFoundError`` even when
        the body is invalid.
        """
        user = await self.users.get_user(user_id)
        entry = ExerciseCreate.model_validate(payload)

        day = entry.date
        if day is None:
            if isinstance(payload.get("date"), str) and payload["date"].strip():
                logger.debug("Unparseable date %r for user %s, using today", payload["date"], user.id)
            day = today()

        with self.db.cursor() as cursor:
            cursor.execute(
                "INSERT INTO exercises (user_id, description, duration, date) VALUES (?, ?, ?, ?)",
                (int(user.id), entry.description, entry.duration, day.isoformat()),
            )
            exercise_id = cursor.lastrowid
        logger.info(
            "Added exercise %s for user %s (%s, %s min, %s)",
            exercise_id,
            user.id,
            entry.description,
            entry.duration,
            day.isoformat(),
        )
        return ExerciseRead(
            id=user.id,
            username=user.username,
            description=entry.description,
            duration=entry.duration,
            date=format_date(day),
        )

    async def get_log(
        self,
        user_id: Any,
        date_from: Any = None,
        date_to: Any = None,
        limit: Any = None,
    ) -> ExerciseLog:
        """Return the user's exercises, filtered by date and capped in length.

        Both bounds are inclusive.  Entries are ordered by date, then by
        insertion order for entries on the same day.
        """
        user = await self.users.get_user(user_id)

        query = "SELECT description, duration, date FROM exercises WHERE user_id = ?"
        params: list = [int(user.id)]
        start = parse_date(date_from) if isinstance(date_from, str) else None
        if start is not None:
            query += " AND date >= ?"
            params.append(start.isoformat())
        end = parse_date(date_to) if isinstance(date_to, str) else None
        if end is not None:
            query += " AND date <= ?"
            params.append(end.isoformat())
        cap = parse_int(limit)
        if cap is None or cap <= 0:
            cap = self.default_limit
        query += " ORDER BY date ASC, id ASC LIMIT ?"
        params.append(cap)

        logger.debug("Log query for user %s: %s %s", user.id, query, params)
        with self.db.cursor() as cursor:
            rows = cursor.execute(query, tuple(params)).fetchall()

        entries: List[LogEntry] = []
        for row in rows:
            day = parse_date(row["date"])
            if day is None:
                # Stored value is unusable; show the current date instead.
                day = today()
            entries.append(
                LogEntry(
                    description=row["description"],
                    duration=row["duration"],
                    date=format_date(day),
                )
            )
        return ExerciseLog(id=user.id, username=user.username, count=len(entries), log=entries)
