"""Success/error normalization for host output records.

Goals
- Any JSON value becomes a list of flat dict records (arrays fan out 1:1).
- Any raised value becomes a plain message string.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"


def normalize(value: Any) -> list[dict[str, Any]]:
    if value is None:
        return []
    if isinstance(value, list):
        return [item if isinstance(item, dict) else {"value": item} for item in value]
    if isinstance(value, dict):
        return [value]
    return [{"value": value}]


def success_records(payload: Any) -> list[dict[str, Any]]:
    """Normalize a handler payload and stamp every record with ``success: True``.

    A handler that returns nothing still reports one ``{"success": True}`` record.
    """

    if payload is None:
        return [{"success": True}]
    return [{**record, "success": True} for record in normalize(payload)]


def to_error_message(error: Any) -> str:
    if isinstance(error, BaseException):
        message = getattr(error, "message", None)
        if isinstance(message, str) and message:
            return message
        return str(error) or UNKNOWN_ERROR_MESSAGE
    if isinstance(error, str):
        return error
    if isinstance(error, Mapping):
        message = error.get("message")
    else:
        message = getattr(error, "message", None)
    if isinstance(message, str):
        return message
    return UNKNOWN_ERROR_MESSAGE


def to_error_object(error: Any) -> dict[str, str]:
    return {"message": to_error_message(error)}
