import json

import pytest
import requests

from user_directory_client import (
    REQUIRED_FIELDS_MESSAGE,
    UserDirectoryClient,
    filter_users,
    validate_user_form,
)


def make_response(status_code, payload=None, url="http://api.test/data"):
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response.encoding = "utf-8"
    response._content = json.dumps(payload).encode("utf-8") if payload is not None else b""
    return response


class FakeSession:
    """Replays queued responses and records each request."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, json=None, timeout=None):
        self.calls.append({"method": method, "url": url, "json": json, "timeout": timeout})
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def make_client(*responses):
    session = FakeSession(*responses)
    return UserDirectoryClient(base_url="http://api.test/", session=session), session


USERS = [
    {"id": 1, "name": "Ana Lima", "email": "ana@x.com"},
    {"id": 2, "name": "Bruno", "email": "bruno@Example.org", "phone": "1"},
    {"id": 3, "name": "Carla", "email": "c@x.com"},
]


def test_validate_user_form():
    assert validate_user_form("Ana", "a@x.com") is None
    assert validate_user_form("", "a@x.com") == REQUIRED_FIELDS_MESSAGE
    assert validate_user_form("Ana", "   ") == REQUIRED_FIELDS_MESSAGE
    assert validate_user_form(None, None) == REQUIRED_FIELDS_MESSAGE


@pytest.mark.parametrize(
    "term, expected_ids",
    [
        ("", [1, 2, 3]),
        (None, [1, 2, 3]),
        ("ana", [1]),
        ("EXAMPLE", [2]),
        ("x.com", [1, 3]),
        ("zzz", []),
    ],
)
def test_filter_users(term, expected_ids):
    assert [u["id"] for u in filter_users(USERS, term)] == expected_ids


def test_filter_users_tolerates_missing_fields():
    assert filter_users([{"id": 9, "email": "only@x.com"}], "only") == [{"id": 9, "email": "only@x.com"}]


def test_list_users_fills_cache_and_search():
    client, session = make_client(make_response(200, USERS))
    users, error = client.list_users()
    assert error is None
    assert users == USERS
    assert session.calls[0]["method"] == "GET"
    assert session.calls[0]["url"] == "http://api.test/data"
    assert session.calls[0]["timeout"] == 15
    assert [u["id"] for u in client.search("carla")] == [3]


def test_get_user_not_found_reports_server_error_message():
    client, _ = make_client(make_response(404, {"error": "Item not found"}))
    user, error = client.get_user(99)
    assert user is None
    assert error == {"status_code": 404, "message": "Item not found"}


def test_create_user_returns_record_from_envelope():
    created = {"id": 4, "name": "Dan", "email": "d@x.com", "phone": ""}
    client, session = make_client(make_response(200, {"message": "Data added successfully!", "data": created}))
    user, error = client.create_user("Dan", "d@x.com")
    assert error is None
    assert user == created
    assert session.calls[0]["method"] == "POST"
    assert session.calls[0]["json"] == {"name": "Dan", "email": "d@x.com", "phone": ""}


def test_create_user_with_blank_email_sends_nothing():
    client, session = make_client()
    user, error = client.create_user("Dan", "")
    assert user is None
    assert error == {"status_code": None, "message": REQUIRED_FIELDS_MESSAGE}
    assert session.calls == []


def test_update_user_puts_to_id_path():
    updated = {"id": 3, "name": "Bea", "email": "b@x.com", "phone": "9"}
    client, session = make_client(make_response(200, {"message": "Data updated successfully!", "data": updated}))
    user, error = client.update_user(3, "Bea", "b@x.com", "9")
    assert error is None
    assert user == updated
    assert session.calls[0]["method"] == "PUT"
    assert session.calls[0]["url"] == "http://api.test/data/3"


def test_update_user_with_blank_name_sends_nothing():
    client, session = make_client()
    _, error = client.update_user(3, " ", "b@x.com")
    assert error["message"] == REQUIRED_FIELDS_MESSAGE
    assert session.calls == []


def test_delete_user_prunes_cache():
    client, _ = make_client(
        make_response(200, USERS),
        make_response(200, {"message": "Data deleted successfully!"}),
    )
    client.list_users()
    ok, error = client.delete_user(2)
    assert ok is True
    assert error is None
    assert [u["id"] for u in client.users] == [1, 3]


def test_failed_delete_refetches_list():
    remaining = USERS[:1]
    client, session = make_client(
        make_response(500, {"error": "Failed to delete data"}),
        make_response(200, remaining),
    )
    client.users = list(USERS)
    ok, error = client.delete_user(2)
    assert ok is False
    assert error == {"status_code": 500, "message": "Failed to delete data"}
    assert [call["method"] for call in session.calls] == ["DELETE", "GET"]
    assert client.users == remaining


def test_network_error_is_returned_not_raised():
    client, _ = make_client(requests.ConnectionError("connection refused"))
    users, error = client.list_users()
    assert users == []
    assert error["status_code"] is None
    assert "connection refused" in error["message"]


def test_non_json_error_body_uses_text():
    response = make_response(502)
    response._content = b"Bad Gateway"
    client, _ = make_client(response)
    _, error = client.list_users()
    assert error == {"status_code": 502, "message": "Bad Gateway"}
