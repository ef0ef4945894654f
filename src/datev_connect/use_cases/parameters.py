"""Typed access to one item's node parameters."""

from __future__ import annotations

import json
import math
from typing import Any

from datev_connect.common.errors import NodeOperationError
from datev_connect.use_cases.execution_host import ExecutionHost


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and not math.isnan(value)


class ParameterReader:
    def __init__(self, host: ExecutionHost, item_index: int) -> None:
        self._host = host
        self.item_index = item_index

    def _error(self, message: str) -> NodeOperationError:
        return NodeOperationError(message, item_index=self.item_index)

    def raw(self, name: str, default: Any = None) -> Any:
        return self._host.get_node_parameter(name, self.item_index, default)

    def optional_string(self, name: str) -> str | None:
        value = self.raw(name, "")
        if _is_number(value):
            return str(value)
        if not isinstance(value, str):
            return None
        return value.strip() or None

    def required_string(self, name: str) -> str:
        value = self.optional_string(name)
        if value is None:
            raise self._error(f'Parameter "{name}" is required.')
        return value

    def number(self, name: str, default: int | float) -> int | float:
        value = self.raw(name, default)
        return value if _is_number(value) else default

    def required_number(self, name: str) -> int | float:
        value = self.raw(name, None)
        if not _is_number(value):
            raise self._error(f'Parameter "{name}" is required and must be a number.')
        return value

    def boolean(self, name: str, default: bool = False) -> bool:
        value = self.raw(name, default)
        return value if isinstance(value, bool) else default

    def optional_json(self, name: str) -> Any:
        value = self.raw(name, None)
        if isinstance(value, str):
            if not value.strip():
                return None
            try:
                return json.loads(value)
            except ValueError as e:
                raise self._error(f'Invalid JSON in parameter "{name}": {e}') from e
        return value

    def json(self, name: str) -> Any:
        value = self.raw(name, None)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise self._error(f'Parameter "{name}" must be provided.')
        return self.optional_json(name)

    def json_object(self, name: str) -> dict[str, Any]:
        value = self.json(name)
        if not isinstance(value, dict):
            raise self._error(f'Parameter "{name}" must be a JSON object.')
        return value

    # -- resource-specific helpers ------------------------------------------

    def odata_query(self, *, top_default: int = 100, paging: bool = True) -> dict[str, Any]:
        """OData query options shared by the accounting calls.

        Single-item reads pass ``paging=False`` and only forward select/filter/expand.
        """

        query: dict[str, Any] = {}
        if paging:
            top = self.number("top", top_default)
            skip = self.number("skip", 0)
            if top > 0:
                query["top"] = top
            if skip > 0:
                query["skip"] = skip

        select = self.optional_string("select")
        if select:
            query["select"] = select
        filter_ = self.optional_string("filter")
        if filter_:
            query["filter"] = filter_
        expand = self.optional_string("expand")
        if expand:
            query["expand"] = "*" if expand == "all" else expand
        return query

    def cost_rate(self) -> int | float | None:
        value = self.raw("costRate", None)
        if not _is_number(value) or value == 0:
            return None
        if value < 1 or value > 9:
            raise self._error("Cost Rate must be between 1 and 9 when provided.")
        return value
