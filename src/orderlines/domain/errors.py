"""Errors raised while orchestrating order line sub-objects."""

from __future__ import annotations


class OrdersError(RuntimeError):
    """Base class for failures surfaced by the orchestration layer."""


class RemoteStatusError(OrdersError):
    """The storage API answered with a non-success status that is not tolerated."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


class StorageTransportError(OrdersError):
    """The storage API could not be reached; no response was received."""


class StorageResponseError(OrdersError):
    """The storage API answered successfully but with an unusable payload."""


class AggregationError(OrdersError):
    """At least one call of a fan-out failed.

    ``cause`` is always the underlying leaf failure; nested aggregation errors are
    unwrapped so callers can inspect the original status or transport error.
    """

    def __init__(self, cause: BaseException) -> None:
        while isinstance(cause, AggregationError):
            cause = cause.cause
        super().__init__(str(cause))
        self.cause = cause

