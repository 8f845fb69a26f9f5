"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from orderlines.adapters.storage import RequestContext, StorageGateway
from orderlines.config.storage import StorageConfig, get_storage_config
from orderlines.domain.adjustments import combine_adjustments
from orderlines.domain.aggregator import OrderAggregator

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from orderlines.domain.model import Adjustment, CompositePoLine, Document

GatewayFactory = Callable[[RequestContext, StorageConfig], StorageGateway]

log = getLogger(__name__)


def fetch_composite_lines(
    order_id: str,
    *,
    config: StorageConfig | None = None,
    context: RequestContext | None = None,
    gateway_factory: GatewayFactory | None = None,
) -> list[CompositePoLine]:
    """Fetch every line of an order with its sub-objects resolved."""

    lines = asyncio.run(
        _run(
            lambda aggregator: aggregator.get_composite_lines(order_id),
            config=config,
            context=context,
            gateway_factory=gateway_factory,
        )
    )
    log.info("Resolved %s po_line(s) of order id=%s", len(lines), order_id)
    return lines


def fetch_composite_line(
    line_id: str,
    *,
    config: StorageConfig | None = None,
    context: RequestContext | None = None,
    gateway_factory: GatewayFactory | None = None,
) -> CompositePoLine:
    return asyncio.run(
        _run(
            lambda aggregator: aggregator.get_composite_line(line_id),
            config=config,
            context=context,
            gateway_factory=gateway_factory,
        )
    )


def fetch_composite_order(
    order_id: str,
    *,
    config: StorageConfig | None = None,
    context: RequestContext | None = None,
    gateway_factory: GatewayFactory | None = None,
) -> Document:
    return asyncio.run(
        _run(
            lambda aggregator: aggregator.get_composite_order(order_id),
            config=config,
            context=context,
            gateway_factory=gateway_factory,
        )
    )


def delete_order_lines(
    order_id: str,
    *,
    config: StorageConfig | None = None,
    context: RequestContext | None = None,
    gateway_factory: GatewayFactory | None = None,
) -> None:
    """Delete every line of an order together with its sub-objects.

    Not atomic across lines; on failure some lines may be gone. Calling it again
    finishes the job.
    """

    asyncio.run(
        _run(
            lambda aggregator: aggregator.delete_lines(order_id),
            config=config,
            context=context,
            gateway_factory=gateway_factory,
        )
    )


def order_adjustment(
    order_id: str,
    *,
    config: StorageConfig | None = None,
    context: RequestContext | None = None,
    gateway_factory: GatewayFactory | None = None,
) -> Adjustment | None:
    lines = fetch_composite_lines(
        order_id,
        config=config,
        context=context,
        gateway_factory=gateway_factory,
    )
    return combine_adjustments(lines)


async def _run[T](
    operation: Callable[[OrderAggregator], Awaitable[T]],
    *,
    config: StorageConfig | None,
    context: RequestContext | None,
    gateway_factory: GatewayFactory | None,
) -> T:
    effective_config = config or get_storage_config()
    effective_context = context or RequestContext.from_config(effective_config)
    factory = gateway_factory or StorageGateway.from_context
    async with factory(effective_context, effective_config) as gateway:
        aggregator = OrderAggregator(
            gateway,
            lang=effective_context.lang,
            max_concurrency=effective_config.max_concurrency,
            line_list_limit=effective_config.line_list_limit,
        )
        return await operation(aggregator)
