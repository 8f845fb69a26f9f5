"""Registry of purchase order line sub-objects and their storage endpoints."""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType
from typing import Final


class SubObjectKind(StrEnum):
    ADJUSTMENT = "adjustment"
    COST = "cost"
    DETAILS = "details"
    ERESOURCE = "eresource"
    LOCATION = "location"
    PHYSICAL = "physical"
    RENEWAL = "renewal"
    SOURCE = "source"
    VENDOR_DETAIL = "vendor_detail"
    ALERTS = "alerts"
    CLAIMS = "claims"
    REPORTING_CODES = "reporting_codes"
    FUND_DISTRIBUTION = "fund_distribution"
    PO_LINES = "po_lines"


SUB_OBJECT_APIS: Final = MappingProxyType(
    {
        SubObjectKind.ADJUSTMENT: "/adjustment/",
        SubObjectKind.COST: "/cost/",
        SubObjectKind.DETAILS: "/details/",
        SubObjectKind.ERESOURCE: "/eresource/",
        SubObjectKind.LOCATION: "/location/",
        SubObjectKind.PHYSICAL: "/physical/",
        SubObjectKind.RENEWAL: "/renewal/",
        SubObjectKind.SOURCE: "/source/",
        SubObjectKind.VENDOR_DETAIL: "/vendor_detail/",
        SubObjectKind.ALERTS: "/alert/",
        SubObjectKind.CLAIMS: "/claim/",
        SubObjectKind.REPORTING_CODES: "/reporting_code/",
        SubObjectKind.FUND_DISTRIBUTION: "/fund_distribution/",
        SubObjectKind.PO_LINES: "/po_line/",
    }
)

SINGLE_VALUED_KINDS: Final = (
    SubObjectKind.ADJUSTMENT,
    SubObjectKind.COST,
    SubObjectKind.DETAILS,
    SubObjectKind.ERESOURCE,
    SubObjectKind.LOCATION,
    SubObjectKind.PHYSICAL,
    SubObjectKind.RENEWAL,
    SubObjectKind.SOURCE,
    SubObjectKind.VENDOR_DETAIL,
)

MULTI_VALUED_KINDS: Final = (
    SubObjectKind.ALERTS,
    SubObjectKind.CLAIMS,
    SubObjectKind.REPORTING_CODES,
    SubObjectKind.FUND_DISTRIBUTION,
)


def endpoint_prefix(kind: SubObjectKind | str) -> str:
    """Return the storage path prefix for ``kind``.

    Unknown kinds raise ``KeyError``: every kind a line can reference is registered.
    """

    try:
        return SUB_OBJECT_APIS[SubObjectKind(kind)]
    except ValueError as exc:
        raise KeyError(kind) from exc


def endpoint(kind: SubObjectKind | str, sub_object_id: str) -> str:
    return f"{endpoint_prefix(kind)}{sub_object_id}"
