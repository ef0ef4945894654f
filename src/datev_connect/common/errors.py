"""Error taxonomy shared by the senders, the parameter reader and the dispatcher."""

from __future__ import annotations

from typing import Any


class DatevError(Exception):
    def __init__(self, message: str, *, item_index: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.item_index = item_index


class NodeOperationError(DatevError):
    """Configuration or input problem the operator has to fix."""


class UnsupportedOperationError(NodeOperationError):
    def __init__(self, resource: str, operation: str, *, item_index: int | None = None) -> None:
        super().__init__(
            f'The operation "{operation}" is not supported for resource "{resource}".',
            item_index=item_index,
        )
        self.resource = resource
        self.operation = operation


class NodeApiError(DatevError):
    """Wraps any non-structured failure raised while running an operation."""

    def __init__(
        self,
        message: str,
        *,
        item_index: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, item_index=item_index)
        self.cause = cause


class DatevRequestError(RuntimeError):
    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        status_text: str = "",
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.status_text = status_text
        self.body = body


class UnsupportedResourceError(NodeOperationError):
    def __init__(self, resource: str, *, item_index: int | None = None) -> None:
        super().__init__(f'The resource "{resource}" is not supported.', item_index=item_index)
        self.resource = resource
