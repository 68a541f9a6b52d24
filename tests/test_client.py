"""Tests for StockMasterClient request building and error mapping."""

import pytest

from frontend.client import ApiError, StockMasterClient, make_client_from_env


_NO_JSON = object()


class StubResponse:
    def __init__(self, status_code, body=_NO_JSON, text=""):
        self.status_code = status_code
        self._body = body
        self.text = text

    def json(self):
        if self._body is _NO_JSON:
            raise ValueError("no json")
        return self._body


class StubHttp:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        return self.responses.pop(0)


def test_login_posts_form_and_keeps_token():
    http = StubHttp(StubResponse(200, {"access_token": "abc", "token_type": "bearer"}))
    client = StockMasterClient(base_url="http://api/", http=http)

    assert client.login("alice@example.com", "pw") == "abc"

    method, url, kwargs = http.requests[0]
    assert (method, url) == ("POST", "http://api/auth/jwt/login")
    assert kwargs["data"] == {"username": "alice@example.com", "password": "pw"}
    assert client.token == "abc"


def test_token_is_sent_as_bearer_header():
    http = StubHttp(StubResponse(200, []))
    client = StockMasterClient(base_url="http://api", http=http, token="abc")

    assert client.list_items() == []

    _, url, kwargs = http.requests[0]
    assert url == "http://api/inventory/items"
    assert kwargs["headers"]["Authorization"] == "Bearer abc"


def test_error_responses_raise_api_error_with_detail():
    http = StubHttp(StubResponse(400, {"detail": "LOGIN_BAD_CREDENTIALS"}))
    client = StockMasterClient(base_url="http://api", http=http)

    with pytest.raises(ApiError) as exc_info:
        client.login("alice@example.com", "wrong")

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "LOGIN_BAD_CREDENTIALS"
    assert client.token is None


def test_non_json_error_body_falls_back_to_text():
    http = StubHttp(StubResponse(502, text="Bad Gateway"))
    client = StockMasterClient(base_url="http://api", http=http, token="abc")

    with pytest.raises(ApiError) as exc_info:
        client.add_item("widget")

    assert exc_info.value.detail == "Bad Gateway"


def test_remove_posts_name_in_body():
    # null: nothing was removed
    http = StubHttp(StubResponse(200, None))
    client = StockMasterClient(base_url="http://api", http=http, token="abc")

    assert client.remove_item("a/b") is None

    method, url, kwargs = http.requests[0]
    assert (method, url) == ("POST", "http://api/inventory/items/remove")
    assert kwargs["json"] == {"name": "a/b"}


def test_make_client_from_env(monkeypatch):
    monkeypatch.setenv("STOCKMASTER_API_URL", "http://stock.example.com")
    assert make_client_from_env().base_url == "http://stock.example.com"
