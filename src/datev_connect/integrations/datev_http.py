"""Shared request sender for the DATEVconnect REST domains.

Purpose
- Build the target URL (host + domain base path + path + query).
- Attach bearer token and tenant headers, serialize JSON bodies.
- Interpret the response once: empty / JSON / text body, ok or not ok.

Every domain client (IAM, DMS, order management, accounting) owns one
``DomainSender`` that only differs in its data (error prefix, base path, tenant
header name). No retries: one attempt per call, failures raise
``DatevRequestError``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote, urlencode, urljoin

from datev_connect.common.errors import DatevRequestError
from datev_connect.common.models import AuthContext, DatevCredentials, FetchImpl, RequestHelper
from datev_connect.integrations.request_helper import fetch_from_request_helper, resolve_fetch

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json;charset=utf-8"
DEFAULT_ERROR_PREFIX = "DATEVconnect request failed"
NO_CONTENT_STATUSES = {204, 205}


def normalise_base_url(host: str) -> str:
    if not host:
        raise ValueError("DATEVconnect host must be provided")
    return host if host.endswith("/") else f"{host}/"


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_url(host: str, path: str, query: dict[str, Any] | None = None) -> str:
    relative = path[1:] if path.startswith("/") else path
    url = urljoin(normalise_base_url(host), relative)

    pairs = [
        (key, _query_value(value))
        for key, value in (query or {}).items()
        if value is not None and value != ""
    ]
    if pairs:
        url = f"{url}{'&' if '?' in url else '?'}{urlencode(pairs)}"
    return url


def read_response_body(response: Any) -> Any:
    """Return the parsed body, text, or None for empty/undecodable bodies."""

    if response.status in NO_CONTENT_STATUSES:
        return None

    content_type = (response.headers.get("content-type") or "").lower()
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            return None

    try:
        text = response.text()
    except UnicodeDecodeError:
        logger.debug("Undecodable %s response body treated as empty", response.status)
        return None
    return text if text else None


def _error_detail(body: Any) -> str | None:
    if isinstance(body, str):
        return body.strip() or None

    if isinstance(body, dict):
        message = next(
            (
                body[key]
                for key in ("message", "detail", "error")
                if isinstance(body.get(key), str) and body[key]
            ),
            None,
        )
        if message is None:
            return None
        description = body.get("error_description")
        if isinstance(description, str) and description:
            return f"{message}: {description}"
        return message

    return None


def extract_error_message(error_prefix: str, response: Any, body: Any) -> str:
    status_part = f"{response.status} {response.status_text or ''}".strip()
    prefix = f"{error_prefix} ({status_part})" if status_part else error_prefix
    detail = _error_detail(body)
    return f"{prefix}: {detail}" if detail else prefix


@dataclass(frozen=True, slots=True)
class RequestResult:
    data: Any
    response: Any

    def location(self) -> str | None:
        headers = self.response.headers
        return headers.get("Location") or headers.get("Link") or None


@dataclass(frozen=True, slots=True)
class DomainSender:
    error_prefix: str
    base_path: str = ""
    tenant_header: str = "x-client-instance-id"

    def path(self, *segments: Any) -> str:
        parts = [self.base_path] if self.base_path else []
        for i, segment in enumerate(segments):
            # The first segment is a literal route; ids are percent-encoded.
            parts.append(str(segment) if i == 0 else quote(str(segment), safe=""))
        return "/".join(parts)

    async def send_request(
        self,
        auth: AuthContext,
        path: str,
        method: str = "GET",
        *,
        query: dict[str, Any] | None = None,
        body: Any = None,
        fetch_impl: FetchImpl | None = None,
    ) -> RequestResult:
        url = build_url(auth.host, path, query)
        headers = {
            "Authorization": f"Bearer {auth.token}",
            self.tenant_header: auth.client_instance_id,
            "Accept": JSON_CONTENT_TYPE,
        }

        payload: str | None = None
        if body is not None:
            payload = json.dumps(body)
            headers["content-type"] = JSON_CONTENT_TYPE

        fetch = resolve_fetch(auth, fetch_impl)
        logger.debug("%s %s", method, url)
        response = await fetch(url, method=method, headers=headers, body=payload)

        data = read_response_body(response)
        if not response.ok:
            raise DatevRequestError(
                extract_error_message(self.error_prefix, response, data),
                status=response.status,
                status_text=response.status_text,
                body=data,
            )
        return RequestResult(data=data, response=response)

    async def send(
        self,
        auth: AuthContext,
        path: str,
        method: str = "GET",
        *,
        query: dict[str, Any] | None = None,
        body: Any = None,
        fetch_impl: FetchImpl | None = None,
    ) -> Any:
        result = await self.send_request(
            auth, path, method, query=query, body=body, fetch_impl=fetch_impl
        )
        return result.data

    def require(self, data: Any, what: str) -> Any:
        if data is None:
            raise DatevRequestError(f"{self.error_prefix}: Expected {what} response.")
        return data


def created_or_location(result: RequestResult, **extra: Any) -> Any:
    """Body of a create/update call, or ``{success, ..., location}`` when empty."""

    if result.data is not None:
        return result.data
    record: dict[str, Any] = {"success": True, **extra}
    location = result.location()
    if location:
        record["location"] = location
    return record


# ---------------------------------------------------------------------------
# Login and the general client listing
# ---------------------------------------------------------------------------

GENERAL = DomainSender(error_prefix=DEFAULT_ERROR_PREFIX, base_path="api")


async def authenticate(
    host: str,
    email: str,
    password: str,
    client_instance_id: str,
    *,
    request_helper: RequestHelper | None = None,
    fetch_impl: FetchImpl | None = None,
) -> dict[str, Any]:
    url = build_url(host, "api/auth/login")
    fetch = (
        fetch_from_request_helper(request_helper)
        if request_helper is not None
        else resolve_fetch(None, fetch_impl)
    )

    logger.debug("POST %s", url)
    response = await fetch(
        url,
        method="POST",
        headers={
            "content-type": "application/json",
            "x-client-instance-id": client_instance_id,
        },
        body=json.dumps(
            {"email": email, "password": password, "clientInstanceId": client_instance_id}
        ),
    )

    body = read_response_body(response)
    if not response.ok:
        raise DatevRequestError(
            extract_error_message(DEFAULT_ERROR_PREFIX, response, body),
            status=response.status,
            status_text=response.status_text,
            body=body,
        )
    if body is not None and not isinstance(body, (dict, list)):
        raise DatevRequestError(f"{DEFAULT_ERROR_PREFIX}: Expected JSON response body.")

    token = None
    if isinstance(body, dict):
        token = body.get("access_token") or body.get("token")
    if not isinstance(token, str) or not token:
        raise DatevRequestError(
            f"{DEFAULT_ERROR_PREFIX}: Authentication response missing access_token."
        )
    return body


async def login(
    credentials: DatevCredentials,
    *,
    request_helper: RequestHelper | None = None,
    fetch_impl: FetchImpl | None = None,
) -> AuthContext:
    body = await authenticate(
        credentials.host,
        credentials.email,
        credentials.password,
        credentials.client_instance_id,
        request_helper=request_helper,
        fetch_impl=fetch_impl,
    )
    return AuthContext(
        host=credentials.host,
        token=body.get("access_token") or body["token"],
        client_instance_id=credentials.client_instance_id,
        request_helper=request_helper,
        fetch_impl=fetch_impl,
    )


async def fetch_clients(
    auth: AuthContext, *, top: int | None = None, skip: int | None = None
) -> Any:
    data = await GENERAL.send(auth, GENERAL.path("clients"), query={"top": top, "skip": skip})
    return GENERAL.require(data, "clients")
