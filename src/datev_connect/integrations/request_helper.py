"""Fetch-compatible transports.

A fetch-compatible function is ``async fetch(url, *, method="GET", headers=None,
body=None)`` returning an object with ``status``, ``status_text``, ``ok``,
``headers.get``, ``json()`` and ``text()`` (see ``HttpResponse``).

Two implementations live here:
- ``fetch_from_request_helper`` adapts a host-provided callback-style request
  primitive (``async helper(options) -> raw result``).
- ``default_fetch`` issues the request directly with httpx.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from datev_connect.common.models import AuthContext, FetchImpl, RequestHelper
from datev_connect.config.settings import http_timeout_from_env
from datev_connect.integrations.http_response import HttpResponse, coerce_headers

logger = logging.getLogger(__name__)

# Host primitives report these in camelCase; snake_case is accepted as well.
_STATUS = ("statusCode", "status_code")
_STATUS_TEXT = ("statusMessage", "status_message")


def _url_of(target: Any) -> str:
    if isinstance(target, str):
        return target
    if isinstance(target, httpx.URL):
        return str(target)
    url = getattr(target, "url", None)
    if url is not None:
        return str(url)
    return str(target)


def _field(obj: Any, *names: str, default: Any = None) -> Any:
    """First non-None value among ``names`` (camelCase wire name first)."""

    if obj is None:
        return default
    for name in names:
        if isinstance(obj, Mapping):
            value = obj.get(name)
        else:
            value = getattr(obj, name, None)
        if value is not None:
            return value
    return default


def fetch_from_request_helper(helper: RequestHelper) -> FetchImpl:
    """Build a fetch-compatible function on top of a host request primitive.

    The helper is always asked for the full response. Failures raised by the
    helper are turned into a (non-ok) ``HttpResponse`` instead of propagating;
    the caller decides what a failed status means.
    """

    async def fetch(
        target: Any,
        *,
        method: str | None = None,
        headers: Any = None,
        body: Any = None,
    ) -> HttpResponse:
        url = _url_of(target)
        method = (method or getattr(target, "method", None) or "GET").upper()
        if headers is None:
            headers = getattr(target, "headers", None)

        options: dict[str, Any] = {
            "url": url,
            "method": method,
            "headers": coerce_headers(headers),
            "body": body,
            "returnFullResponse": True,
            "return_full_response": True,
        }

        try:
            result = await helper(options)
        except Exception as error:
            logger.debug("Request helper failed for %s %s: %s", method, url, error)
            response = _field(error, "response")
            status = _field(error, *_STATUS) or _field(response, *_STATUS) or 500
            status_text = (
                _field(error, *_STATUS_TEXT)
                or _field(response, *_STATUS_TEXT)
                or str(error)
                or "Internal Server Error"
            )
            error_body = _field(
                response, "body", default=_field(error, "body", default=str(error) or None)
            )
            error_headers = _field(response, "headers") or _field(error, "headers") or {}
            return HttpResponse(
                error_body,
                status=int(status),
                status_text=status_text,
                headers=error_headers,
            )

        return HttpResponse(
            _field(result, "body"),
            status=int(_field(result, *_STATUS, default=200)),
            status_text=_field(result, *_STATUS_TEXT, default=""),
            headers=_field(result, "headers", default={}),
        )

    return fetch


async def default_fetch(
    target: Any,
    *,
    method: str = "GET",
    headers: Any = None,
    body: Any = None,
) -> HttpResponse:
    timeout = http_timeout_from_env()
    async with httpx.AsyncClient(timeout=timeout) as client:
        resp = await client.request(
            method,
            _url_of(target),
            headers=coerce_headers(headers),
            content=body,
        )
    return HttpResponse.from_httpx(resp)


def resolve_fetch(auth: AuthContext | None, fetch_impl: FetchImpl | None = None) -> FetchImpl:
    """Pick the transport for one call.

    Order: the host request helper, then an explicitly passed function, then the
    one stored on the auth context, then httpx.
    """

    if auth is not None and auth.request_helper is not None:
        return fetch_from_request_helper(auth.request_helper)
    if fetch_impl is not None:
        return fetch_impl
    if auth is not None and auth.fetch_impl is not None:
        return auth.fetch_impl
    return default_fetch
