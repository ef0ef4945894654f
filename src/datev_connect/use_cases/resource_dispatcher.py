"""Resource/operation dispatch for DATEVconnect items.

Goal
- One registry per API domain maps (resource, operation) to a pure async
  handler ``(params, auth) -> JSON value``.
- One generic driver runs validate -> route -> extract -> invoke -> emit and owns
  the continue-on-fail decision, so handlers never catch errors themselves.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from datev_connect.common.errors import (
    DatevError,
    NodeApiError,
    NodeOperationError,
    UnsupportedOperationError,
    UnsupportedResourceError,
)
from datev_connect.common.models import (
    AuthContext,
    DatevCredentials,
    FetchImpl,
    OperationRequest,
    RequestHelper,
)
from datev_connect.config.settings import validate_credentials
from datev_connect.integrations.datev_http import login
from datev_connect.use_cases.execution_host import ExecutionHost
from datev_connect.use_cases.normalization import success_records, to_error_message
from datev_connect.use_cases.parameters import ParameterReader

logger = logging.getLogger(__name__)

ResourceHandler = Callable[[ParameterReader, AuthContext], Awaitable[Any]]

# Raised even under continue-on-fail.
ALWAYS_RAISED = (UnsupportedOperationError, UnsupportedResourceError)


class ResourceRegistry:
    def __init__(self, name: str) -> None:
        self.name = name
        self._handlers: dict[str, dict[str, ResourceHandler]] = {}

    def register(self, resource: str, operation: str) -> Callable[[ResourceHandler], ResourceHandler]:
        def _decorator(fn: ResourceHandler) -> ResourceHandler:
            self._handlers.setdefault(resource, {})[operation] = fn
            return fn

        return _decorator

    def get(self, resource: str, operation: str) -> ResourceHandler | None:
        return self._handlers.get(resource, {}).get(operation)

    def resources(self) -> set[str]:
        return set(self._handlers.keys())

    def implemented_operations(self, resource: str) -> set[str]:
        return set(self._handlers.get(resource, {}).keys())

    def route(self, request: OperationRequest) -> ResourceHandler:
        operations = self._handlers.get(request.resource)
        if operations is None:
            raise UnsupportedResourceError(request.resource, item_index=request.item_index)
        handler = operations.get(request.operation)
        if handler is None:
            raise UnsupportedOperationError(
                request.resource, request.operation, item_index=request.item_index
            )
        return handler


def validate_auth_context(auth: AuthContext | None, item_index: int | None = None) -> None:
    if auth is None or not auth.is_complete():
        raise NodeOperationError("Authentication context is incomplete", item_index=item_index)


class ResourceDispatcher:
    def __init__(self, registry: ResourceRegistry) -> None:
        self._registry = registry

    async def execute(
        self,
        request: OperationRequest,
        auth: AuthContext,
        host: ExecutionHost,
        output: list[dict[str, Any]],
    ) -> None:
        """Run one item and append its records to ``output``.

        Either appends the success records, appends exactly one ``{"error": ...}``
        record (continue-on-fail), or raises.
        """

        logger.debug(
            "Dispatching %s.%s (%s) for item %s",
            request.resource,
            request.operation,
            self._registry.name,
            request.item_index,
        )
        try:
            validate_auth_context(auth, request.item_index)
            handler = self._registry.route(request)
            params = ParameterReader(host, request.item_index)
            payload = await handler(params, auth)
        except ALWAYS_RAISED:
            raise
        except Exception as e:
            if host.continue_on_fail():
                message = to_error_message(e)
                logger.warning(
                    "Item %s failed (%s.%s), continuing: %s",
                    request.item_index,
                    request.resource,
                    request.operation,
                    message,
                )
                output.append({"error": message})
                return
            if isinstance(e, DatevError):
                raise
            raise NodeApiError(to_error_message(e), item_index=request.item_index, cause=e) from e

        output.extend(success_records(payload))


async def execute_items(
    host: ExecutionHost,
    auth: AuthContext,
    registry: ResourceRegistry,
) -> list[dict[str, Any]]:
    """Process every input item sequentially and return the flat record list."""

    dispatcher = ResourceDispatcher(registry)
    output: list[dict[str, Any]] = []
    for item_index in range(len(host.get_input_items())):
        request = OperationRequest(
            resource=host.get_node_parameter("resource", item_index),
            operation=host.get_node_parameter("operation", item_index),
            item_index=item_index,
        )
        await dispatcher.execute(request, auth, host, output)
    return output


async def run_node(
    host: ExecutionHost,
    credentials: DatevCredentials | dict[str, Any],
    registry: ResourceRegistry,
    *,
    request_helper: RequestHelper | None = None,
    fetch_impl: FetchImpl | None = None,
) -> list[dict[str, Any]]:
    """Log in once, then run all items against ``registry``."""

    creds = validate_credentials(credentials)
    try:
        auth = await login(creds, request_helper=request_helper, fetch_impl=fetch_impl)
    except DatevError:
        raise
    except Exception as e:
        raise NodeApiError(to_error_message(e), cause=e) from e
    return await execute_items(host, auth, registry)
