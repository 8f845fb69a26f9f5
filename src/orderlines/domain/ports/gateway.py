"""Port for issuing operations against sub-object storage endpoints."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from orderlines.domain.model import Document


class Operation(StrEnum):
    READ = "GET"
    CREATE = "POST"
    UPDATE = "PUT"
    DELETE = "DELETE"


@runtime_checkable
class SubObjectGateway(Protocol):
    """Single-call access to the storage API.

    ``perform`` returns an empty document when the target does not exist, so a
    retried delete never fails on sub-objects an earlier attempt already removed.
    ``get_document`` is the strict read: a missing resource is an error.
    """

    async def perform(
        self,
        operation: Operation,
        path: str,
        document: Document | None = None,
    ) -> Document:
        ...

    async def get_document(self, path: str) -> Document:
        ...


__all__ = ["Operation", "SubObjectGateway"]
