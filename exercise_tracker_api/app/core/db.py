"""
SQLite document store and simple migration system.

The ``Database`` class is the process‑scoped store handle.  It knows
where the database file lives, hands out short‑lived connections
(``connect``) and cursors (``cursor``), and applies migrations on
application start (``init``).  The application factory creates one
instance and stores it on ``app.state.db``; route handlers obtain it
through the ``get_db`` dependency and pass it explicitly to the
services.

Applied migration versions are stored in the ``migrations`` table and
new migrations are executed in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from fastapi import Request


logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        -- Dates are stored as ISO ``YYYY-MM-DD`` text so that range
        -- filters and ordering can compare them lexically.
        CREATE TABLE IF NOT EXISTS exercises (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL,
            description TEXT NOT NULL,
            duration INTEGER NOT NULL,
            date TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(user_id) REFERENCES users(id)
        );
        """,
    ),
    # Migration 2: index serving the log query (user filter + date order)
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_exercises_user_date ON exercises(user_id, date);
        """,
    ),
]


def resolve_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    An absolute path is used as is.  Otherwise the path is resolved
    relative to the project root.
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # exercise_tracker_api/
    return str((base_dir / database_url).resolve())


class Database:
    """Handle on the SQLite file backing users and exercises.

    The handle itself holds no open connection; every operation opens
    its own connection and closes it when done, so the object can be
    shared freely between requests.
    """

    def __init__(self, database_url: str) -> None:
        self.path = resolve_database_path(database_url)

    def connect(self) -> sqlite3.Connection:
        """Create and return a new SQLite connection.

        Rows are returned as ``sqlite3.Row`` objects so columns can be
        accessed by name.  Foreign key enforcement is switched on for
        the lifetime of the connection.
        """
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, commit on success, roll back on error and close."""
        conn = self.connect()
        try:
            yield conn.cursor()
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init(self) -> None:
        """Create the database file if needed and apply pending migrations."""
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with self.cursor() as cursor:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            cursor.execute("SELECT MAX(version) as version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    logger.info("Applying migration %s to %s", version, self.path)
                    cursor.executescript(sql)
                    cursor.execute(
                        "INSERT INTO migrations (version) VALUES (?)", (version,)
                    )
                    current_version = version


def get_db(request: Request) -> Database:
    """FastAPI dependency returning the store handle of the running app."""
    return request.app.state.db
