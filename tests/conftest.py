from __future__ import annotations

import pytest

from orderlines.domain.assembler import CompositeLineAssembler
from orderlines.domain.aggregator import OrderAggregator
from tests.support.storage import ORDER_ID, FakeStorage


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def assembler(storage: FakeStorage) -> CompositeLineAssembler:
    return CompositeLineAssembler(storage)


@pytest.fixture
def aggregator(storage: FakeStorage) -> OrderAggregator:
    return OrderAggregator(storage)


@pytest.fixture
def stored_order(storage: FakeStorage) -> FakeStorage:
    """An order with two lines, each referencing single and multi-valued sub-objects."""

    storage.add("/purchase_order/order-1", {"id": ORDER_ID, "po_number": "10001"})
    storage.add("/cost/c1", {"id": "c1", "list_price": 10.0, "quantity": 2})
    storage.add("/cost/c2", {"id": "c2", "list_price": 4.5, "quantity": 1})
    storage.add("/adjustment/a1", {"id": "a1", "credit": 5.0, "tax1": 2.0})
    storage.add("/adjustment/a2", {"id": "a2", "credit": 3.0, "discount": 1.0})
    storage.add("/location/l1", {"id": "l1", "location_id": "main"})
    storage.add("/alert/al1", {"id": "al1", "alert": "Receipt overdue"})
    storage.add("/alert/al2", {"id": "al2", "alert": "Cancelled"})
    storage.add("/claim/cl1", {"id": "cl1", "claimed": False})
    storage.add_line(
        {
            "id": "line-1",
            "purchase_order_id": ORDER_ID,
            "po_line_number": "10001-1",
            "cost": "c1",
            "adjustment": "a1",
            "location": "l1",
            "alerts": ["al1", "al2"],
            "claims": ["cl1"],
        }
    )
    storage.add_line(
        {
            "id": "line-2",
            "purchase_order_id": ORDER_ID,
            "po_line_number": "10001-2",
            "cost": "c2",
            "adjustment": "a2",
            "alerts": [],
        }
    )
    return storage
