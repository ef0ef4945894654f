"""Shared data models for the DATEVconnect core."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Union

from pydantic import BaseModel, ConfigDict, Field

JsonValue = Union[None, bool, int, float, str, list[Any], dict[str, Any]]

# Host-provided callback-style request primitive: options dict in, raw result out.
RequestHelper = Callable[[dict[str, Any]], Awaitable[Any]]
FetchImpl = Callable[..., Awaitable[Any]]


# ---------------------------------------------------------------------------
# Run-scoped values
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AuthContext:
    host: str
    token: str
    client_instance_id: str
    request_helper: RequestHelper | None = None
    fetch_impl: FetchImpl | None = None

    def is_complete(self) -> bool:
        return bool(self.host and self.token and self.client_instance_id)


@dataclass(frozen=True, slots=True)
class OperationRequest:
    resource: str
    operation: str
    item_index: int


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------


class DatevCredentials(BaseModel):
    """Login material for one DATEVconnect instance."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    host: str = Field(min_length=1)
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)
    client_instance_id: str = Field(min_length=1)
