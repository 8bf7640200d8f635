"""
Business logic for users.

The ``UserService`` registers users and lists them.  Usernames are
not required to be unique.  Store failures (``sqlite3.Error``) are
propagated to the caller unchanged.
"""

import logging
from typing import Any, List

from ..core.db import Database
from ..schemas.user import UserCreate, UserRead


logger = logging.getLogger(__name__)

# Largest value SQLite can store in an INTEGER PRIMARY KEY.
_MAX_ROW_ID = 2**63 - 1


class UserNotFoundError(ValueError):
    """Raised when an identifier does not match any stored user."""

    def __init__(self, user_id: Any) -> None:
        super().__init__("User not found")
        self.user_id = user_id


def parse_user_id(user_id: Any) -> int:
    """Convert an identifier taken from a URL into a row id.

    Anything that is not a plain decimal number cannot name a stored
    user and raises ``UserNotFoundError``.
    """
    text = str(user_id).strip()
    if not (text.isascii() and text.isdigit()) or len(text) > 19 or int(text) > _MAX_ROW_ID:
        raise UserNotFoundError(user_id)
    return int(text)


class UserService:
    """Registry of users backed by the given store handle."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def create_user(self, data: UserCreate) -> UserRead:
        """Create a new user and return it."""
        username = data.username
        with self.db.cursor() as cursor:
            cursor.execute("INSERT INTO users (username) VALUES (?)", (username,))
            user_id = cursor.lastrowid
        logger.info("Registered user %s with id %s", username, user_id)
        return UserRead(id=str(user_id), username=username)

    async def list_users(self) -> List[UserRead]:
        """Return all users from the database."""
        with self.db.cursor() as cursor:
            rows = cursor.execute("SELECT id, username FROM users ORDER BY id").fetchall()
        return [UserRead(id=str(row["id"]), username=row["username"]) for row in rows]

    async def get_user(self, user_id: Any) -> UserRead:
        """Return a single user or raise ``UserNotFoundError``."""
        row_id = parse_user_id(user_id)
        with self.db.cursor() as cursor:
            row = cursor.execute(
                "SELECT id, username FROM users WHERE id = ?", (row_id,)
            ).fetchone()
        if not row:
            raise UserNotFoundError(user_id)
        return UserRead(id=str(row["id"]), username=row["username"])
