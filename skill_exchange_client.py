"""Skill Exchange API client.

A thin wrapper around the Skill Exchange REST API built on
``requests``.  It is meant for scripts, bots and integration checks
that talk to a running server.

Every public method returns a tuple ``(data, error)``.  On success
``data`` holds the decoded JSON response and ``error`` is ``None``; on
failure ``data`` is ``None`` (or an empty list for list calls) and
``error`` is a dictionary with the keys ``status_code`` and
``message``.  The client never raises for HTTP or connection errors.

Example::

    api = SkillExchangeAPI(base_url="http://localhost:5000")
    user, error = api.login("alice", "secret123")
    conversations, error = api.list_conversations(user["user"]["id"])

A successful :meth:`login` stores the access token; it is then sent as
``Authorization: Bearer <token>`` with every request.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

logger = logging.getLogger(__name__)

Error = Dict[str, Any]
Result = Tuple[Optional[Any], Optional[Error]]


class SkillExchangeAPI:
    """Client for the ``/api`` endpoints of a Skill Exchange server."""

    def __init__(
        self,
        *,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Server root, e.g. ``http://localhost:5000``.  The
                ``/api`` prefix is added by the client.
            token: Optional bearer token from a previous login.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Result:
        """Perform an HTTP request against ``/api<path>``.

        Query parameters whose value is ``None`` are dropped.
        """
        url = f"{self.base_url}/api{path}"
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _list(self, path: str, params: Dict[str, Any] | None = None) -> Tuple[List[Any], Optional[Error]]:
        data, error = self._request("GET", path, params=params)
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    # ------------------------------------------------------------------
    # Auth and profile
    # ------------------------------------------------------------------
    def signup(self, payload: Dict[str, Any]) -> Result:
        """Register a user.  ``payload`` holds username, email, password and full_name."""
        return self._request("POST", "/auth/signup", json_body=payload)

    def login(self, username: str, password: str) -> Result:
        """Log in and remember the returned access token."""
        data, error = self._request(
            "POST", "/auth/login", json_body={"username": username, "password": password}
        )
        if data and data.get("access_token"):
            self.token = data["access_token"]
        return data, error

    def logout(self) -> Result:
        data, error = self._request("POST", "/auth/logout")
        self.token = None
        return data, error

    def get_profile(self, user_id: str) -> Result:
        return self._request("GET", f"/profile/{user_id}")

    def update_profile(self, user_id: str, updates: Dict[str, Any]) -> Result:
        """Edit the logged in user's profile (requires :meth:`login`)."""
        return self._request("PUT", f"/profile/{user_id}", json_body=updates)

    # ------------------------------------------------------------------
    # Skills and matches
    # ------------------------------------------------------------------
    def list_skills(self, user_id: str) -> Tuple[List[Any], Optional[Error]]:
        return self._list("/skills", {"user_id": user_id})

    def create_skill(self, payload: Dict[str, Any]) -> Result:
        return self._request("POST", "/skills", json_body=payload)

    def list_matches(self, user_id: str) -> Tuple[List[Any], Optional[Error]]:
        return self._list("/matches", {"user_id": user_id})

    def request_match(self, payload: Dict[str, Any]) -> Result:
        return self._request("POST", "/matches/request", json_body=payload)

    def update_match_status(self, match_id: str, status: str) -> Result:
        return self._request("PUT", f"/matches/{match_id}/status", json_body={"status": status})

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------
    def send_message(self, sender_id: str, receiver_id: str, content: str) -> Result:
        return self._request(
            "POST",
            "/messages",
            json_body={"sender_id": sender_id, "receiver_id": receiver_id, "content": content},
        )

    def get_thread(self, user_id: str, partner_id: str) -> Tuple[List[Any], Optional[Error]]:
        return self._list(f"/messages/{partner_id}", {"user_id": user_id})

    def list_conversations(self, user_id: str) -> Tuple[List[Any], Optional[Error]]:
        return self._list("/conversations", {"user_id": user_id})

    # ------------------------------------------------------------------
    # Events and reviews
    # ------------------------------------------------------------------
    def list_events(self, user_id: str) -> Tuple[List[Any], Optional[Error]]:
        return self._list("/events", {"user_id": user_id})

    def create_event(self, payload: Dict[str, Any]) -> Result:
        return self._request("POST", "/events", json_body=payload)

    def list_reviews(self, user_id: str) -> Tuple[List[Any], Optional[Error]]:
        return self._list(f"/reviews/{user_id}")

    def create_review(self, payload: Dict[str, Any]) -> Result:
        return self._request("POST", "/reviews", json_body=payload)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------
    def list_notifications(self, user_id: str) -> Tuple[List[Any], Optional[Error]]:
        return self._list("/notifications", {"user_id": user_id})

    def mark_notification_read(self, notification_id: str) -> Result:
        return self._request("PUT", f"/notifications/{notification_id}/read")

    def mark_all_notifications_read(self, user_id: str) -> Result:
        return self._request("PUT", "/notifications/read-all", json_body={"user_id": user_id})
