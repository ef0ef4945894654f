"""Shared fixtures for the DATEVconnect tests."""

from __future__ import annotations

import json

import pytest

from datev_connect.common.models import AuthContext
from datev_connect.integrations.http_response import HttpResponse


class RecordingFetch:
    """Fetch-compatible double that records calls and replays canned responses."""

    def __init__(self, *responses: HttpResponse) -> None:
        self._responses = list(responses)
        self.calls: list[dict] = []

    async def __call__(self, url, *, method="GET", headers=None, body=None):
        self.calls.append({"url": str(url), "method": method, "headers": headers or {}, "body": body})
        if not self._responses:
            return json_response({})
        return self._responses.pop(0)

    @property
    def last(self) -> dict:
        return self.calls[-1]


def json_response(payload, *, status: int = 200, status_text: str = "OK", headers=None) -> HttpResponse:
    return HttpResponse(
        json.dumps(payload),
        status=status,
        status_text=status_text,
        headers={"content-type": "application/json; charset=utf-8", **(headers or {})},
    )


@pytest.fixture
def make_fetch():
    return RecordingFetch


@pytest.fixture
def make_auth():
    def _make(fetch=None, *, host: str = "https://datev.example.com", request_helper=None) -> AuthContext:
        return AuthContext(
            host=host,
            token="tok-123",
            client_instance_id="tenant-1",
            request_helper=request_helper,
            fetch_impl=fetch,
        )

    return _make


@pytest.fixture
def json_resp():
    return json_response
