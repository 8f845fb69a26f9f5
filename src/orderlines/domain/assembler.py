"""Fan-out/fan-in resolution of purchase order line sub-objects.

A line as stored holds only references to its sub-objects: an id for single-valued
kinds such as ``cost`` and a list of ids for multi-valued kinds such as ``alerts``.
The assembler issues one storage call per reference, all of them concurrently, and
only touches the line once every call has finished.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Any

from .errors import AggregationError
from .fanout import Dispatcher, gather_all
from .model import CompositePoLine
from .ports.gateway import Operation
from .subobjects import (
    MULTI_VALUED_KINDS,
    SINGLE_VALUED_KINDS,
    SubObjectKind,
    endpoint,
    endpoint_prefix,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from .model import Document
    from .ports.gateway import SubObjectGateway

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class _SubObjectResult:
    kind: SubObjectKind
    reference: str | None
    document: Document


class CompositeLineAssembler:
    def __init__(
        self,
        gateway: SubObjectGateway,
        *,
        dispatcher: Dispatcher | None = None,
    ) -> None:
        self._gateway = gateway
        self.dispatcher = dispatcher or Dispatcher()

    async def resolve(self, operation: Operation, line: Mapping[str, Any]) -> CompositePoLine:
        """Run ``operation`` on every sub-object referenced by ``line``.

        For reads and deletes the sub-object fields of ``line`` hold ids; for creates
        and updates they hold the documents to send. The result has each field
        replaced by the document storage returned. Empty results are left out; outside
        of deletes that is unexpected and logged as a warning.

        Raises ``AggregationError`` carrying the first failed call. Sibling calls are
        not cancelled and their results are discarded.
        """

        working = dict(line)
        line_id = working.get("id")
        log.debug("The PO line prior to %s operation: %s", operation, working)

        calls: list[Awaitable[_SubObjectResult]] = []
        for kind in SINGLE_VALUED_KINDS:
            value = working.pop(kind, None)
            if value is not None:
                calls.append(self._operate_on_sub_object(operation, kind, value))
        for kind in MULTI_VALUED_KINDS:
            if kind not in working:
                continue
            values = working.pop(kind) or []
            working[kind] = []
            calls.extend(self._operate_on_sub_object(operation, kind, value) for value in values)

        try:
            results = await gather_all(calls)
        except AggregationError:
            log.error(
                "Exception resolving one or more po_line sub-object(s) on %s operation",
                operation,
                exc_info=True,
            )
            raise

        for result in results:
            if not result.document:
                if operation is not Operation.DELETE:
                    log.warning(
                        "The '%s' sub-object with id=%s is empty for Order line with id=%s",
                        result.kind,
                        result.reference,
                        line_id,
                    )
                continue
            if result.kind in MULTI_VALUED_KINDS:
                working[result.kind].append(result.document)
            else:
                working[result.kind] = result.document

        log.debug("The PO line after %s operation on sub-objects: %s", operation, working)
        return CompositePoLine.model_validate(working)

    async def delete_line(self, line: Mapping[str, Any]) -> None:
        """Delete every sub-object of ``line``, then the line record itself.

        The line record is only deleted once all sub-object deletes succeeded, so a
        failed attempt leaves the line in place and can simply be retried.
        """

        if not line.get("id"):
            raise ValueError("Cannot delete a PO line without an id")
        dereferenced = await self.resolve(Operation.DELETE, line)
        line_id = dereferenced.id or line["id"]
        await self.call(Operation.DELETE, endpoint(SubObjectKind.PO_LINES, line_id))

    async def create_line(self, line: Mapping[str, Any]) -> CompositePoLine:
        """Store the sub-objects of a composite line, then the line referencing them."""

        composite = await self.resolve(Operation.CREATE, line)
        created = await self.call(
            Operation.CREATE,
            endpoint_prefix(SubObjectKind.PO_LINES),
            to_stub(composite),
        )
        line_id = created.get("id") or composite.id
        return composite.model_copy(update={"id": line_id})

    async def update_line(self, line: Mapping[str, Any]) -> CompositePoLine:
        """Update the sub-objects of a composite line, then the line record."""

        line_id = line.get("id")
        if not line_id:
            raise ValueError("Cannot update a PO line without an id")
        composite = await self.resolve(Operation.UPDATE, line)
        await self.call(
            Operation.UPDATE,
            endpoint(SubObjectKind.PO_LINES, line_id),
            to_stub(composite),
        )
        return composite

    async def call(
        self,
        operation: Operation,
        path: str,
        document: Document | None = None,
    ) -> Document:
        return await self.dispatcher.run(self._gateway.perform(operation, path, document))

    async def _operate_on_sub_object(
        self,
        operation: Operation,
        kind: SubObjectKind,
        value: object,
    ) -> _SubObjectResult:
        if operation in (Operation.READ, Operation.DELETE):
            if not isinstance(value, str):
                raise TypeError(f"Expected an id for '{kind}' on {operation}, got {value!r}")
            document = await self.call(operation, endpoint(kind, value))
            return _SubObjectResult(kind=kind, reference=value, document=document)

        if not isinstance(value, Mapping):
            raise TypeError(f"Expected a document for '{kind}' on {operation}, got {value!r}")
        payload = dict(value)
        sub_object_id = payload.get("id")
        if operation is Operation.UPDATE and sub_object_id:
            document = await self.call(operation, endpoint(kind, sub_object_id), payload)
            # Storage answers a successful PUT without a body.
            return _SubObjectResult(
                kind=kind,
                reference=sub_object_id,
                document=document or payload,
            )
        document = await self.call(Operation.CREATE, endpoint_prefix(kind), payload)
        return _SubObjectResult(kind=kind, reference=document.get("id"), document=document)


def to_stub(line: CompositePoLine | Mapping[str, Any]) -> Document:
    """Replace embedded sub-object documents with their ids, as the line is stored."""

    document = line.to_document() if isinstance(line, CompositePoLine) else dict(line)
    for kind in SINGLE_VALUED_KINDS:
        value = document.get(kind)
        if not isinstance(value, Mapping):
            continue
        if value.get("id") is None:
            del document[kind]
        else:
            document[kind] = value["id"]
    for kind in MULTI_VALUED_KINDS:
        values = document.get(kind)
        if values is None:
            continue
        references = (value.get("id") if isinstance(value, Mapping) else value for value in values)
        document[kind] = [reference for reference in references if reference is not None]
    return document
