"""Exercise tracker API client.

This module defines a small client wrapper around the exercise tracker
REST API.  The client uses the ``requests`` library internally and
exposes one method per route:

* :meth:`create_user` – register a new user.
* :meth:`list_users` – return every registered user.
* :meth:`add_exercise` – log an exercise for a user.
* :meth:`get_log` – fetch a user's exercise log, optionally filtered.

Every method returns a tuple ``(data, error)``.  On success ``error`` is
``None``.  On failure ``data`` is ``None`` (or an empty list) and
``error`` is a dictionary with keys ``status_code`` and ``message``.
The API reports an unknown user with status 200 and an ``error`` body;
the client surfaces such soft errors through ``error`` as well.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple, Union

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class ExerciseTrackerAPI:
    """Client for interacting with the exercise tracker API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:3000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Timeout in seconds applied to every request.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Result:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET`` or ``POST``).
            path: Path relative to :attr:`base_url` (e.g. ``/api/users``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json() if response.content else None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("error") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}
        except ValueError as exc:
            logger.error("API returned invalid JSON: %s", exc)
            return None, {"status_code": response.status_code, "message": "Invalid JSON response"}
        if isinstance(data, dict) and "error" in data:
            logger.warning("API reported an error for %s %s: %s", method, path, data["error"])
            return None, {"status_code": response.status_code, "message": data["error"]}
        return data, None

    # ------------------------------------------------------------------
    # User operations
    # ------------------------------------------------------------------
    def create_user(self, username: str) -> Result:
        """Register a user and return ``{"username", "_id"}``."""
        return self._request("POST", "/api/users", json_body={"username": username})

    def list_users(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Retrieve all users.

        Returns:
            A tuple ``(users, error)``. ``users`` is empty on failure.
        """
        data, error = self._request("GET", "/api/users")
        if error:
            return [], error
        return (data if isinstance(data, list) else []), None

    # ------------------------------------------------------------------
    # Exercise operations
    # ------------------------------------------------------------------
    def add_exercise(
        self,
        user_id: Any,
        description: str,
        duration: int,
        when: Union[date, str, None] = None,
    ) -> Result:
        """Log an exercise for ``user_id``.

        Args:
            user_id: Identifier returned by :meth:`create_user`.
            description: Free‑form description of the exercise.
            duration: Duration in minutes.
            when: Optional date (``datetime.date`` or ``YYYY-MM-DD``).  The
                server uses today's date when omitted.
        """
        payload: Dict[str, Any] = {"description": description, "duration": duration}
        if when is not None:
            payload["date"] = when.isoformat() if isinstance(when, date) else when
        return self._request("POST", f"/api/users/{user_id}/exercises", json_body=payload)

    def get_log(
        self,
        user_id: Any,
        *,
        date_from: Union[date, str, None] = None,
        date_to: Union[date, str, None] = None,
        limit: Optional[int] = None,
    ) -> Result:
        """Fetch the exercise log of ``user_id``.

        Only the filters that are given are sent as query parameters.
        """
        params: Dict[str, Any] = {}
        if date_from is not None:
            params["from"] = date_from.isoformat() if isinstance(date_from, date) else date_from
        if date_to is not None:
            params["to"] = date_to.isoformat() if isinstance(date_to, date) else date_to
        if limit is not None:
            params["limit"] = limit
        return self._request("GET", f"/api/users/{user_id}/logs", params=params or None)
