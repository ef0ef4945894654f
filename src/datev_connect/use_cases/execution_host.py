"""Host-side capabilities the dispatcher depends on."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from datev_connect.common.errors import NodeOperationError

MISSING: Any = object()


class ExecutionHost(Protocol):
    def get_input_items(self) -> list[dict[str, Any]]: ...

    def get_node_parameter(self, name: str, item_index: int, default: Any = MISSING) -> Any: ...

    def continue_on_fail(self) -> bool: ...


@dataclass(slots=True)
class StaticExecutionHost:
    """In-memory host: one parameter dict per input item.

    Used by scripts and tests; parameter lookups never evaluate expressions.
    """

    items: list[dict[str, Any]] = field(default_factory=list)
    continue_on_failure: bool = False

    def get_input_items(self) -> list[dict[str, Any]]:
        return self.items

    def get_node_parameter(self, name: str, item_index: int, default: Any = MISSING) -> Any:
        params = self.items[item_index] if 0 <= item_index < len(self.items) else {}
        if name in params:
            return params[name]
        if default is not MISSING:
            return default
        raise NodeOperationError(f'Could not get parameter "{name}".', item_index=item_index)

    def continue_on_fail(self) -> bool:
        return self.continue_on_failure
