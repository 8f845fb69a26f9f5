"""Order level access to composite purchase order lines."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .adjustments import combine_adjustments
from .assembler import CompositeLineAssembler
from .errors import AggregationError, StorageResponseError
from .fanout import Dispatcher, gather_all
from .model import PoLineCollection
from .ports.gateway import Operation
from .subobjects import SubObjectKind, endpoint

if TYPE_CHECKING:
    from .model import CompositePoLine, Document
    from .ports.gateway import SubObjectGateway

log = getLogger(__name__)

DEFAULT_LINE_LIST_LIMIT = 999


class OrderAggregator:
    """Resolves and deletes all lines of a purchase order.

    Per-line work runs concurrently and is joined with wait-for-all semantics: a
    failing line never stops its siblings, so a failed ``delete_lines`` may have
    removed some lines already. Re-running it is safe because storage deletes of
    missing records are tolerated.
    """

    def __init__(
        self,
        gateway: SubObjectGateway,
        *,
        lang: str = "en",
        max_concurrency: int | None = None,
        line_list_limit: int = DEFAULT_LINE_LIST_LIMIT,
        assembler: CompositeLineAssembler | None = None,
    ) -> None:
        self._gateway = gateway
        self._lang = lang
        self._line_list_limit = line_list_limit
        self._assembler = assembler or CompositeLineAssembler(
            gateway, dispatcher=Dispatcher(max_concurrency)
        )

    @property
    def assembler(self) -> CompositeLineAssembler:
        return self._assembler

    async def get_po_lines(self, order_id: str) -> list[Document]:
        """Fetch the stored (unresolved) lines of ``order_id``."""

        path = (
            f"/po_line?limit={self._line_list_limit}"
            f"&query=purchase_order_id=={order_id}&lang={self._lang}"
        )
        payload = await self._assembler.dispatcher.run(self._gateway.get_document(path))
        collection = PoLineCollection.model_validate(payload)
        if collection.total_records is not None and collection.total_records > len(
            collection.po_lines
        ):
            log.warning(
                "Order id=%s has %s lines, only %s were retrieved",
                order_id,
                collection.total_records,
                len(collection.po_lines),
            )
        return collection.po_lines

    async def get_composite_lines(self, order_id: str) -> list[CompositePoLine]:
        """Return every line of ``order_id`` with its sub-objects resolved.

        Either all lines are returned or the call fails; a partial list is never
        returned.
        """

        lines = await self.get_po_lines(order_id)
        try:
            return await gather_all(
                self._assembler.resolve(Operation.READ, line) for line in lines
            )
        except AggregationError:
            log.error("Exception gathering po_line data for order id=%s", order_id, exc_info=True)
            raise

    async def get_composite_line(self, line_id: str) -> CompositePoLine:
        path = f"{endpoint(SubObjectKind.PO_LINES, line_id)}?lang={self._lang}"
        line = await self._assembler.dispatcher.run(self._gateway.get_document(path))
        try:
            return await self._assembler.resolve(Operation.READ, line)
        except AggregationError:
            log.error("Exception calling GET %s", path, exc_info=True)
            raise

    async def delete_lines(self, order_id: str) -> None:
        lines = await self.get_po_lines(order_id)
        try:
            await gather_all(self._assembler.delete_line(line) for line in lines)
        except AggregationError:
            log.error("Exception deleting po_line data for order id=%s", order_id, exc_info=True)
            raise
        log.info("Deleted %s po_line(s) of order id=%s", len(lines), order_id)

    async def get_purchase_order(self, order_id: str) -> Document:
        path = f"/purchase_order/{order_id}?lang={self._lang}"
        return await self._assembler.dispatcher.run(self._gateway.get_document(path))

    async def get_composite_order(self, order_id: str) -> Document:
        """Return the purchase order with its resolved lines and combined adjustment."""

        order = await self.get_purchase_order(order_id)
        if not order:
            raise StorageResponseError(f"Empty purchase order payload for id={order_id}")
        lines = await self.get_composite_lines(order_id)
        composite = dict(order)
        composite["po_lines"] = [line.to_document() for line in lines]
        adjustment = combine_adjustments(lines)
        if adjustment is not None:
            composite["adjustment"] = adjustment.to_document()
        return composite
