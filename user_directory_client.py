"""User directory API client.

A thin wrapper around the user directory REST API for front ends that
list, search, create, edit and delete users.  It uses the ``requests``
library and never raises for HTTP or network problems: every method
returns a tuple ``(result, error)`` where ``error`` is ``None`` on
success or a dictionary with ``status_code`` and ``message`` keys.

Besides the HTTP calls the client carries the rules that live on the
front-end side of the API:

* :func:`validate_user_form` -- ``name`` and ``email`` must be filled
  in; when they are not, no request is sent.
* :func:`filter_users` / :meth:`UserDirectoryClient.search` --
  case-insensitive substring search on name or email.
* :meth:`UserDirectoryClient.delete_user` -- if a delete fails the user
  list is fetched again so the cached view matches the server.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields"

Error = Dict[str, Any]


def validate_user_form(name: Optional[str], email: Optional[str]) -> Optional[str]:
    """Return an error message when a required field is blank, else ``None``."""
    if not (name or "").strip() or not (email or "").strip():
        return REQUIRED_FIELDS_MESSAGE
    return None


def filter_users(users: Iterable[Dict[str, Any]], term: Optional[str]) -> List[Dict[str, Any]]:
    """Return users whose name or email contains ``term``, ignoring case.

    A blank term matches everyone.  Records without a name or email are
    matched on whichever field they do have.
    """
    needle = (term or "").lower()
    if not needle:
        return list(users)
    return [
        user
        for user in users
        if needle in str(user.get("name") or "").lower()
        or needle in str(user.get("email") or "").lower()
    ]


class UserDirectoryClient:
    """Client for the user directory API.

    The most recent successful listing is kept in :attr:`users` so that
    :meth:`search` can filter without another round trip.
    """

    def __init__(
        self,
        *,
        base_url: str = "http://localhost:4000",
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the client.

        Args:
            base_url: Base URL of the API, e.g. ``http://localhost:4000``.
            session: Optional requests session.  A new one is created if
                not supplied.
            timeout: Seconds to wait for each request.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.users: List[Dict[str, Any]] = []

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/data``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.  ``data`` holds the parsed JSON
            response on success; on failure it is ``None`` and ``error``
            describes the problem.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
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
                    if isinstance(err_json, dict):
                        message = err_json.get("error") or err_json.get("message") or str(err_json)
                    else:
                        message = str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _user_body(name: str, email: str, phone: Optional[str]) -> Dict[str, Any]:
        return {"name": name, "email": email, "phone": phone or ""}

    # ------------------------------------------------------------------
    # User operations
    # ------------------------------------------------------------------
    def list_users(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Fetch all users and refresh the local cache.

        Returns:
            A tuple ``(users, error)``.  ``users`` is empty on failure and
            the cache is left untouched.
        """
        data, error = self._request("GET", "/data")
        if error:
            return [], error
        users = data if isinstance(data, list) else []
        self.users = users
        return users, None

    def get_user(self, user_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Fetch a single user by id."""
        data, error = self._request("GET", f"/data/{user_id}")
        if error:
            return None, error
        return data, None

    def create_user(
        self, name: str, email: str, phone: Optional[str] = ""
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a user and return the stored record (with its new id).

        Blank ``name`` or ``email`` is reported without contacting the
        server.
        """
        problem = validate_user_form(name, email)
        if problem:
            return None, {"status_code": None, "message": problem}
        data, error = self._request("POST", "/data", json_body=self._user_body(name, email, phone))
        if error:
            return None, error
        return (data or {}).get("data"), None

    def update_user(
        self, user_id: Any, name: str, email: str, phone: Optional[str] = ""
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Replace a user's fields; the same required-field rule as create applies."""
        problem = validate_user_form(name, email)
        if problem:
            return None, {"status_code": None, "message": problem}
        data, error = self._request(
            "PUT", f"/data/{user_id}", json_body=self._user_body(name, email, phone)
        )
        if error:
            return None, error
        return (data or {}).get("data"), None

    def delete_user(self, user_id: Any) -> Tuple[bool, Optional[Error]]:
        """Delete a user.

        On success the user is dropped from the cache.  On failure the
        list is fetched again so the cache reflects the server.
        """
        _, error = self._request("DELETE", f"/data/{user_id}")
        if error:
            logger.warning("Delete of user %s failed, refreshing list", user_id)
            self.list_users()
            return False, error
        self.users = [user for user in self.users if str(user.get("id")) != str(user_id)]
        return True, None

    def search(self, term: Optional[str]) -> List[Dict[str, Any]]:
        """Filter the cached users by name or email."""
        return filter_users(self.users, term)
