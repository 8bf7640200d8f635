# -*- coding: utf-8 -*-

from __future__ import annotations

import shutil
import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from exercise_tracker_api.app.core.config import Settings
from exercise_tracker_api.app.core.db import Database
from exercise_tracker_api.app.main import create_app


class TempDatabaseTestCase(unittest.TestCase):
    """Gives every test a fresh SQLite file in a temporary directory."""

    def setUp(self) -> None:
        self._tmp = Path(tempfile.mkdtemp(prefix="exercise-tracker-"))
        self.addCleanup(shutil.rmtree, self._tmp, ignore_errors=True)
        self.db_path = str(self._tmp / "tracker.db")
        self.settings = Settings(database_url=self.db_path, log_level="WARNING")
        self.db = Database(self.db_path)
        self.db.init()


class ApiTestCase(TempDatabaseTestCase):
    """Runs requests against an app bound to the temporary database.

    The client is entered as a context manager so the app's lifespan
    (logging setup and migrations) runs.
    """

    def setUp(self) -> None:
        super().setUp()
        self.app = create_app(self.settings)
        self.client = TestClient(self.app)
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

    def create_user(self, username: str = "fcc_test") -> str:
        resp = self.client.post("/api/users", json={"username": username})
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()["_id"]

    def add_exercise(self, user_id: str, **body) -> dict:
        body.setdefault("description", "Running")
        body.setdefault("duration", 30)
        resp = self.client.post(f"/api/users/{user_id}/exercises", json=body)
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()
