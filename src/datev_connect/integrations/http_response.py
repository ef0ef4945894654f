"""In-memory HTTP response with the read surface of a fetch Response.

Purpose
- Give the senders one response shape regardless of which transport ran the call
  (host request helper, httpx, or a test double).
- Only buffered bodies are supported; the binary accessors raise NotImplementedError.
"""

from __future__ import annotations

import copy
import json
from collections.abc import Iterable, Mapping
from typing import Any

import httpx

_UNSET: Any = object()


def coerce_headers(raw: Any) -> dict[str, str]:
    """Flatten a header container into a plain ``{name: value}`` dict.

    Accepts mappings (including ``httpx.Headers``) and iterables of pairs.
    List values are joined with ", ".
    """

    if raw is None:
        return {}

    if isinstance(raw, httpx.Headers):
        items: Iterable[tuple[Any, Any]] = raw.multi_items()
    elif isinstance(raw, Mapping):
        items = raw.items()
    else:
        items = raw

    out: dict[str, str] = {}
    for key, value in items:
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            value = ", ".join(str(v) for v in value)
        name = str(key)
        existing = out.get(name)
        out[name] = f"{existing}, {value}" if existing is not None else str(value)
    return out


class HttpResponse:
    def __init__(
        self,
        body: Any = None,
        *,
        status: int = 200,
        status_text: str = "",
        headers: Any = None,
    ) -> None:
        self._body = body
        self.status = status
        self.status_text = status_text
        self.headers = httpx.Headers(coerce_headers(headers))
        self._json: Any = _UNSET
        self._text: Any = _UNSET

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        if self._json is _UNSET:
            body = self._body
            if isinstance(body, (bytes, bytearray)):
                body = body.decode("utf-8")
            self._json = json.loads(body) if isinstance(body, str) else body
        return self._json

    def text(self) -> str:
        if self._text is _UNSET:
            body = self._body
            if body is None:
                self._text = ""
            elif isinstance(body, str):
                self._text = body
            elif isinstance(body, (bytes, bytearray)):
                self._text = body.decode("utf-8")
            else:
                self._text = json.dumps(body, separators=(",", ":"), ensure_ascii=False)
        return self._text

    def clone(self) -> "HttpResponse":
        twin = HttpResponse(
            copy.deepcopy(self._body),
            status=self.status,
            status_text=self.status_text,
            headers=self.headers,
        )
        twin._json = self._json if self._json is _UNSET else copy.deepcopy(self._json)
        twin._text = self._text
        return twin

    def array_buffer(self) -> bytes:
        raise NotImplementedError("array_buffer() is not implemented for buffered responses")

    def blob(self) -> bytes:
        raise NotImplementedError("blob() is not implemented for buffered responses")

    def form_data(self) -> dict[str, Any]:
        raise NotImplementedError("form_data() is not implemented for buffered responses")

    @classmethod
    def from_httpx(cls, resp: httpx.Response) -> "HttpResponse":
        return cls(
            resp.text,
            status=resp.status_code,
            status_text=resp.reason_phrase,
            headers=resp.headers,
        )

    def __repr__(self) -> str:
        return f"HttpResponse(status={self.status}, status_text={self.status_text!r})"
