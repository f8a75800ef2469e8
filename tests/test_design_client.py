"""Tests for the design service HTTP client."""

from __future__ import annotations

import pytest
import requests

from sticker_designer.services import design_client
from sticker_designer.services.design_client import DesignClient, DesignClientError


class _FakeResponse:
    def __init__(self, status_code: int, payload=None, reason: str = "OK") -> None:
        self.status_code = status_code
        self._payload = payload
        self.reason = reason

    def json(self):
        if self._payload is None:
            raise ValueError("no JSON body")
        return self._payload


class _Calls(list):
    pass


@pytest.fixture
def fake(monkeypatch):
    recorded = _Calls()
    recorded.responses = []

    def fake_request(method, url, **kwargs):
        recorded.append((method, url, kwargs))
        result = recorded.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    monkeypatch.setattr(design_client.requests, "request", fake_request)
    return recorded


def test_save_design_posts_stickers(fake):
    fake.responses.append(_FakeResponse(200, {"success": True, "message": "Design saved!"}))
    client = DesignClient("http://designs.local:3000/", timeout=2.0)

    message = client.save_design([{"type": "text_label", "text": "Hi"}])

    assert message == "Design saved!"
    method, url, kwargs = fake[0]
    assert method == "post"
    assert url == "http://designs.local:3000/api/save-design"
    assert kwargs["json"] == {"stickers": [{"type": "text_label", "text": "Hi"}]}
    assert kwargs["timeout"] == 2.0


def test_list_designs(fake):
    records = [{"id": 1, "stickers": []}]
    fake.responses.append(_FakeResponse(200, records))

    assert DesignClient("http://designs.local").list_designs() == records
    assert fake[0][:2] == ("get", "http://designs.local/api/designs")


def test_list_designs_rejects_unexpected_shape(fake):
    fake.responses.append(_FakeResponse(200, {"oops": True}))
    with pytest.raises(DesignClientError, match="Unexpected"):
        DesignClient().list_designs()


def test_error_status_uses_service_message(fake):
    fake.responses.append(_FakeResponse(400, {"error": "No stickers data"}, reason="BAD REQUEST"))
    with pytest.raises(DesignClientError, match="400: No stickers data"):
        DesignClient().save_design([])


def test_error_status_without_json_uses_reason(fake):
    fake.responses.append(_FakeResponse(502, None, reason="Bad Gateway"))
    with pytest.raises(DesignClientError, match="502: Bad Gateway"):
        DesignClient().list_designs()


def test_connection_failure_is_wrapped(fake):
    fake.responses.append(requests.exceptions.ConnectionError("refused"))
    with pytest.raises(DesignClientError, match="unreachable"):
        DesignClient().save_design([])
