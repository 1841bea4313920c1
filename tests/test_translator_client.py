"""Tests for the requests-based Translator API client."""

from unittest.mock import MagicMock

import pytest
import requests

from translator_client import TranslatorAPI


class FakeResponse:
    """Minimal stand-in for ``requests.Response``."""

    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text
        self.content = b"" if payload is None and not text else b"body"

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api(session):
    return TranslatorAPI(base_url="http://translator.test/", session=session)


def test_create_translation_sends_message_details(api, session):
    session.request.return_value = FakeResponse(201, {"id": 2, "original_message_id": 1})

    data, error = api.create_message(language_id=2, content="Tłumaczenie", original_message_id=1)

    assert error is None
    assert data["id"] == 2
    kwargs = session.request.call_args.kwargs
    assert kwargs["method"] == "POST"
    assert kwargs["url"] == "http://translator.test/api/v1/messages/"
    assert kwargs["json"] == {
        "original_message_id": 1,
        "language_id": 2,
        "content": "Tłumaczenie",
        "tag_ids": [],
    }


def test_list_messages_drops_unset_filters(api, session):
    session.request.return_value = FakeResponse(200, [{"id": 1}])

    data, error = api.list_messages(content="hello")

    assert (data, error) == ([{"id": 1}], None)
    assert session.request.call_args.kwargs["params"] == {"content": "hello", "limit": 100, "offset": 0}


def test_http_error_is_reported(api, session):
    session.request.return_value = FakeResponse(422, {"detail": "Original message must be in English, not Polish"})

    data, error = api.update_message(1, language_id=2, content="x")

    assert data is None
    assert error == {"status_code": 422, "message": "Original message must be in English, not Polish"}


def test_http_error_without_json_uses_text(api, session):
    session.request.return_value = FakeResponse(500, text="Internal Server Error")

    _, error = api.get_message(1)

    assert error == {"status_code": 500, "message": "Internal Server Error"}


def test_connection_error_is_reported(api, session):
    session.request.side_effect = requests.ConnectionError("connection refused")

    data, error = api.list_languages()

    assert data == []
    assert error == {"status_code": None, "message": "connection refused"}


def test_delete_returns_success_flag(api, session):
    session.request.return_value = FakeResponse(204)
    assert api.delete_message(1) == (True, None)

    session.request.return_value = FakeResponse(404, {"detail": "Message not found"})
    assert api.delete_message(1) == (False, {"status_code": 404, "message": "Message not found"})


def test_get_language_and_tag(api, session):
    session.request.return_value = FakeResponse(200, {"id": 1, "name": "English"})

    data, error = api.get_language(1)

    assert (data, error) == ({"id": 1, "name": "English"}, None)
    kwargs = session.request.call_args.kwargs
    assert (kwargs["method"], kwargs["url"]) == ("GET", "http://translator.test/api/v1/languages/1")

    session.request.return_value = FakeResponse(404, {"detail": "Tag not found"})

    data, error = api.get_tag(7)

    assert data is None
    assert error == {"status_code": 404, "message": "Tag not found"}
    assert session.request.call_args.kwargs["url"] == "http://translator.test/api/v1/tags/7"
