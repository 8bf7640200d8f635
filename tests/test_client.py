# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import unittest
from datetime import date
from unittest import mock

import requests

from exercise_tracker_client import ExerciseTrackerAPI


def _response(status_code: int, body) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = json.dumps(body).encode("utf-8")
    resp.headers["Content-Type"] = "application/json"
    return resp


class TestExerciseTrackerAPI(unittest.TestCase):
    def setUp(self) -> None:
        self.session = mock.Mock(spec=requests.Session)
        self.api = ExerciseTrackerAPI(base_url="http://tracker.test/", session=self.session)

    def test_create_user(self) -> None:
        self.session.request.return_value = _response(200, {"username": "eve", "_id": "1"})

        data, error = self.api.create_user("eve")

        self.assertIsNone(error)
        self.assertEqual(data, {"username": "eve", "_id": "1"})
        kwargs = self.session.request.call_args.kwargs
        self.assertEqual(kwargs["method"], "POST")
        self.assertEqual(kwargs["url"], "http://tracker.test/api/users")
        self.assertEqual(kwargs["json"], {"username": "eve"})

    def test_add_exercise_serializes_date(self) -> None:
        self.session.request.return_value = _response(200, {"username": "eve", "_id": "1"})

        self.api.add_exercise("1", "Run", 30, date(2023, 3, 15))

        kwargs = self.session.request.call_args.kwargs
        self.assertEqual(kwargs["url"], "http://tracker.test/api/users/1/exercises")
        self.assertEqual(kwargs["json"], {"description": "Run", "duration": 30, "date": "2023-03-15"})

    def test_get_log_sends_only_given_filters(self) -> None:
        self.session.request.return_value = _response(200, {"username": "eve", "count": 0, "_id": "1", "log": []})

        data, error = self.api.get_log("1", date_from=date(2023, 1, 1), limit=2)

        self.assertIsNone(error)
        self.assertEqual(data["count"], 0)
        self.assertEqual(self.session.request.call_args.kwargs["params"], {"from": "2023-01-01", "limit": 2})

    def test_soft_error_is_reported(self) -> None:
        self.session.request.return_value = _response(200, {"error": "User not found"})

        data, error = self.api.get_log("404")

        self.assertIsNone(data)
        self.assertEqual(error, {"status_code": 200, "message": "User not found"})

    def test_http_error(self) -> None:
        self.session.request.return_value = _response(500, {"error": "Could not get users"})

        users, error = self.api.list_users()

        self.assertEqual(users, [])
        self.assertEqual(error, {"status_code": 500, "message": "Could not get users"})

    def test_connection_error(self) -> None:
        self.session.request.side_effect = requests.ConnectionError("refused")

        data, error = self.api.create_user("eve")

        self.assertIsNone(data)
        self.assertIsNone(error["status_code"])
        self.assertIn("refused", error["message"])


if __name__ == "__main__":
    unittest.main()
