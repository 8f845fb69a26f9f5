"""Purchase order line documents and the adjustment aggregate."""

from __future__ import annotations

from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field

type Document = dict[str, Any]

ADJUSTMENT_AMOUNT_FIELDS: Final = (
    "credit",
    "discount",
    "insurance",
    "overhead",
    "shipment",
    "tax1",
    "tax2",
)


class OrdersBaseModel(BaseModel):
    # Storage documents carry many fields the orchestration never looks at.
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_document(self) -> Document:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Adjustment(OrdersBaseModel):
    id: str | None = None
    credit: float | None = None
    discount: float | None = None
    insurance: float | None = None
    overhead: float | None = None
    shipment: float | None = None
    tax1: float | None = None
    tax2: float | None = None

    def amounts(self) -> dict[str, float | None]:
        return {name: getattr(self, name) for name in ADJUSTMENT_AMOUNT_FIELDS}


class CompositePoLine(OrdersBaseModel):
    """A purchase order line with its sub-objects embedded as full documents."""

    id: str | None = None
    purchase_order_id: str | None = None
    adjustment: Adjustment | None = None
    cost: Document | None = None
    details: Document | None = None
    eresource: Document | None = None
    location: Document | None = None
    physical: Document | None = None
    renewal: Document | None = None
    source: Document | None = None
    vendor_detail: Document | None = None
    alerts: list[Document] | None = None
    claims: list[Document] | None = None
    reporting_codes: list[Document] | None = None
    fund_distribution: list[Document] | None = None


class PoLineCollection(OrdersBaseModel):
    po_lines: list[Document] = Field(default_factory=list)
    total_records: int | None = Field(default=None, alias="totalRecords")
