from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from orderlines import app
from orderlines.adapters.storage import RequestContext
from orderlines.config.storage import StorageConfig, default_storage_resilience
from orderlines.domain.errors import AggregationError, RemoteStatusError
from orderlines.domain.ports.gateway import Operation
from tests.support.storage import ORDER_ID

if TYPE_CHECKING:
    from tests.support.storage import FakeStorage


@pytest.fixture
def config() -> StorageConfig:
    return StorageConfig(
        resilience=default_storage_resilience(base_url="http://okapi.test"),
        tenant="diku",
        lang="fr",
        max_concurrency=4,
    )


def test_fetch_composite_lines_uses_configured_context(
    stored_order: FakeStorage,
    config: StorageConfig,
) -> None:
    contexts: list[RequestContext] = []

    def factory(context: RequestContext, _config: StorageConfig) -> FakeStorage:
        contexts.append(context)
        return stored_order

    lines = app.fetch_composite_lines(ORDER_ID, config=config, gateway_factory=factory)  # type: ignore[arg-type]

    assert {line.id for line in lines} == {"line-1", "line-2"}
    assert contexts[0].tenant == "diku"
    assert contexts[0].okapi_url == "http://okapi.test"
    assert stored_order.started[0].path.endswith("&lang=fr")
    assert stored_order.closed


def test_explicit_context_wins_over_config(
    stored_order: FakeStorage,
    config: StorageConfig,
) -> None:
    context = RequestContext(headers={"X-Okapi-Tenant": "college"}, lang="en")

    app.fetch_composite_line(
        "line-1",
        config=config,
        context=context,
        gateway_factory=lambda _context, _config: stored_order,  # type: ignore[arg-type,return-value]
    )

    assert stored_order.started[0].path == "/po_line/line-1?lang=en"


def test_delete_order_lines_removes_everything(
    stored_order: FakeStorage,
    config: StorageConfig,
) -> None:
    app.delete_order_lines(
        ORDER_ID,
        config=config,
        gateway_factory=lambda _context, _config: stored_order,  # type: ignore[arg-type,return-value]
    )

    assert set(stored_order.records) == {"/purchase_order/order-1"}


def test_delete_order_lines_surfaces_the_root_cause(
    stored_order: FakeStorage,
    config: StorageConfig,
) -> None:
    stored_order.failures[(Operation.DELETE, "/cost/c2")] = RemoteStatusError(422, "locked")

    with pytest.raises(AggregationError) as exc_info:
        app.delete_order_lines(
            ORDER_ID,
            config=config,
            gateway_factory=lambda _context, _config: stored_order,  # type: ignore[arg-type,return-value]
        )

    assert isinstance(exc_info.value.cause, RemoteStatusError)
    assert exc_info.value.cause.code == 422
    assert stored_order.closed


def test_order_adjustment_combines_line_adjustments(
    stored_order: FakeStorage,
    config: StorageConfig,
) -> None:
    adjustment = app.order_adjustment(
        ORDER_ID,
        config=config,
        gateway_factory=lambda _context, _config: stored_order,  # type: ignore[arg-type,return-value]
    )

    assert adjustment is not None
    assert adjustment.credit == 8.0
    assert adjustment.discount == 1.0
    assert adjustment.tax1 == 2.0


def test_fetch_composite_order(stored_order: FakeStorage, config: StorageConfig) -> None:
    order = app.fetch_composite_order(
        ORDER_ID,
        config=config,
        gateway_factory=lambda _context, _config: stored_order,  # type: ignore[arg-type,return-value]
    )

    assert order["id"] == ORDER_ID
    assert len(order["po_lines"]) == 2
