from __future__ import annotations

import asyncio
import json

import pytest

from datev_connect.common.errors import DatevRequestError
from datev_connect.common.models import DatevCredentials
from datev_connect.integrations.datev_http import (
    GENERAL,
    DomainSender,
    authenticate,
    build_url,
    extract_error_message,
    fetch_clients,
    login,
    read_response_body,
)
from datev_connect.integrations.http_response import HttpResponse

SENDER = DomainSender(error_prefix="DATEV Test request failed", base_path="datev/api/test/v1")


def test_build_url_joins_host_path_and_query() -> None:
    assert build_url("https://h.example", "/api/clients") == "https://h.example/api/clients"
    assert build_url("https://h.example/", "api/clients") == "https://h.example/api/clients"
    assert (
        build_url("https://h", "x", {"top": 10, "skip": None, "filter": "", "expand": True})
        == "https://h/x?top=10&expand=true"
    )
    assert build_url("https://h", "x", {"costrate": 2.0, "flag": False}) == (
        "https://h/x?costrate=2&flag=false"
    )


def test_build_url_rejects_empty_host() -> None:
    with pytest.raises(ValueError, match="host must be provided"):
        build_url("", "x")


def test_path_encodes_ids_but_not_route() -> None:
    assert SENDER.path("documents", "a/b c") == "datev/api/test/v1/documents/a%2Fb%20c"
    assert DomainSender("p").path("orders/monthlyvalues") == "orders/monthlyvalues"


def test_read_response_body_variants() -> None:
    assert read_response_body(HttpResponse("ignored", status=204)) is None
    assert read_response_body(HttpResponse("", headers={"content-type": "text/plain"})) is None
    assert read_response_body(HttpResponse("hi", headers={"content-type": "text/plain"})) == "hi"
    assert (
        read_response_body(HttpResponse("{broken", headers={"content-type": "application/json"}))
        is None
    )
    assert read_response_body(
        HttpResponse('{"a": 1}', headers={"Content-Type": "application/json"})
    ) == {"a": 1}


@pytest.mark.parametrize(
    "body, expected",
    [
        ("  plain failure  ", "P (400 Bad Request): plain failure"),
        ({"message": "m"}, "P (400 Bad Request): m"),
        ({"detail": "d"}, "P (400 Bad Request): d"),
        ({"error": "invalid_grant", "error_description": "bad password"}, "P (400 Bad Request): invalid_grant: bad password"),
        ({"other": "x"}, "P (400 Bad Request)"),
        (None, "P (400 Bad Request)"),
    ],
)
def test_extract_error_message(body, expected) -> None:
    response = HttpResponse(status=400, status_text="Bad Request")
    assert extract_error_message("P", response, body) == expected


def test_send_attaches_auth_headers_and_json_body(make_fetch, make_auth, json_resp) -> None:
    fetch = make_fetch(json_resp({"id": "x1"}))
    auth = make_auth(fetch)

    data = asyncio.run(SENDER.send(auth, SENDER.path("items"), "POST", body={"name": "n"}))

    assert data == {"id": "x1"}
    call = fetch.last
    assert call["url"] == "https://datev.example.com/datev/api/test/v1/items"
    assert call["method"] == "POST"
    assert call["headers"]["Authorization"] == "Bearer tok-123"
    assert call["headers"]["x-client-instance-id"] == "tenant-1"
    assert call["headers"]["Accept"] == "application/json;charset=utf-8"
    assert call["headers"]["content-type"] == "application/json;charset=utf-8"
    assert json.loads(call["body"]) == {"name": "n"}


def test_send_without_body_omits_content_type(make_fetch, make_auth) -> None:
    fetch = make_fetch()
    asyncio.run(SENDER.send(make_auth(fetch), SENDER.path("items")))

    assert fetch.last["body"] is None
    assert "content-type" not in fetch.last["headers"]


def test_send_uses_custom_tenant_header(make_fetch, make_auth) -> None:
    fetch = make_fetch()
    sender = DomainSender("P", base_path="b", tenant_header="X-DATEV-Client-Instance-Id")
    asyncio.run(sender.send(make_auth(fetch), sender.path("x")))

    assert fetch.last["headers"]["X-DATEV-Client-Instance-Id"] == "tenant-1"
    assert "x-client-instance-id" not in fetch.last["headers"]


def test_send_raises_on_non_ok(make_fetch, make_auth, json_resp) -> None:
    fetch = make_fetch(json_resp({"message": "Client unknown"}, status=404, status_text="Not Found"))

    with pytest.raises(DatevRequestError) as excinfo:
        asyncio.run(SENDER.send(make_auth(fetch), SENDER.path("items", "1")))

    err = excinfo.value
    assert str(err) == "DATEV Test request failed (404 Not Found): Client unknown"
    assert err.status == 404
    assert err.body == {"message": "Client unknown"}


def test_send_request_exposes_location(make_fetch, make_auth) -> None:
    fetch = make_fetch(HttpResponse(None, status=201, headers={"Location": "/items/9"}))
    result = asyncio.run(SENDER.send_request(make_auth(fetch), SENDER.path("items"), "POST", body={}))

    assert result.data is None
    assert result.location() == "/items/9"


def test_explicit_fetch_wins_over_auth_fetch(make_fetch, make_auth) -> None:
    stored = make_fetch()
    explicit = make_fetch()
    asyncio.run(SENDER.send(make_auth(stored), SENDER.path("x"), fetch_impl=explicit))

    assert explicit.calls and not stored.calls


def test_require_raises_for_empty_body() -> None:
    with pytest.raises(DatevRequestError, match="DATEV Test request failed: Expected items response."):
        SENDER.require(None, "items")
    assert SENDER.require([], "items") == []


def test_authenticate_posts_credentials(make_fetch, json_resp) -> None:
    fetch = make_fetch(json_resp({"access_token": "abc", "expires_in": 3600}))

    body = asyncio.run(
        authenticate("https://h.example", "a@b.c", "pw", "tenant-9", fetch_impl=fetch)
    )

    assert body["access_token"] == "abc"
    call = fetch.last
    assert call["url"] == "https://h.example/api/auth/login"
    assert call["method"] == "POST"
    assert call["headers"] == {"content-type": "application/json", "x-client-instance-id": "tenant-9"}
    assert json.loads(call["body"]) == {
        "email": "a@b.c",
        "password": "pw",
        "clientInstanceId": "tenant-9",
    }


def test_authenticate_requires_token(make_fetch, json_resp) -> None:
    fetch = make_fetch(json_resp({"expires_in": 3600}))
    with pytest.raises(DatevRequestError, match="missing access_token"):
        asyncio.run(authenticate("https://h", "e", "p", "c", fetch_impl=fetch))


def test_authenticate_rejects_text_body(make_fetch) -> None:
    fetch = make_fetch(HttpResponse("welcome", headers={"content-type": "text/html"}))
    with pytest.raises(DatevRequestError, match="Expected JSON response body"):
        asyncio.run(authenticate("https://h", "e", "p", "c", fetch_impl=fetch))


def test_authenticate_failure_status(make_fetch, json_resp) -> None:
    fetch = make_fetch(
        json_resp(
            {"error": "invalid_grant", "error_description": "wrong password"},
            status=401,
            status_text="Unauthorized",
        )
    )
    with pytest.raises(DatevRequestError) as excinfo:
        asyncio.run(authenticate("https://h", "e", "p", "c", fetch_impl=fetch))

    assert str(excinfo.value) == (
        "DATEVconnect request failed (401 Unauthorized): invalid_grant: wrong password"
    )


def test_login_builds_auth_context_via_request_helper() -> None:
    seen: list[dict] = []

    async def helper(options):
        seen.append(options)
        return {
            "status_code": 200,
            "headers": {"content-type": "application/json"},
            "body": {"token": "legacy-token"},
        }

    creds = DatevCredentials(
        host="https://h.example", email="e@x", password="p", client_instance_id="c-1"
    )
    auth = asyncio.run(login(creds, request_helper=helper))

    assert auth.token == "legacy-token"
    assert auth.host == "https://h.example"
    assert auth.client_instance_id == "c-1"
    assert auth.request_helper is helper
    assert seen[0]["url"] == "https://h.example/api/auth/login"
    assert seen[0]["returnFullResponse"] is True


def test_fetch_clients_uses_general_api(make_fetch, make_auth, json_resp) -> None:
    fetch = make_fetch(json_resp([{"id": "c1"}]))

    data = asyncio.run(fetch_clients(make_auth(fetch), top=5))

    assert data == [{"id": "c1"}]
    assert fetch.last["url"] == "https://datev.example.com/api/clients?top=5"
    assert GENERAL.error_prefix == "DATEVconnect request failed"


def test_fetch_clients_requires_body(make_fetch, make_auth) -> None:
    fetch = make_fetch(HttpResponse(None, status=204))
    with pytest.raises(DatevRequestError, match="Expected clients response"):
        asyncio.run(fetch_clients(make_auth(fetch)))


def test_read_response_body_treats_undecodable_bytes_as_empty() -> None:
    text_resp = HttpResponse(b"\xff\xfeabc", status=200, headers={"content-type": "text/plain"})
    json_resp = HttpResponse(b"\xff\xfe{}", status=200, headers={"content-type": "application/json"})

    assert read_response_body(text_resp) is None
    assert read_response_body(json_resp) is None


def test_send_returns_none_for_undecodable_body(make_fetch, make_auth) -> None:
    fetch = make_fetch(HttpResponse(b"\xff\xfe", status=200, headers={"content-type": "text/plain"}))

    assert asyncio.run(SENDER.send(make_auth(fetch), SENDER.path("items"))) is None
