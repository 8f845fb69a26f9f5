"""Aggregation of the adjustment sub-objects of purchase order lines."""

from __future__ import annotations

from collections.abc import Mapping
from functools import reduce
from typing import TYPE_CHECKING, Any

from .model import ADJUSTMENT_AMOUNT_FIELDS, Adjustment, CompositePoLine

if TYPE_CHECKING:
    from collections.abc import Iterable


def combine_adjustments(
    lines: Iterable[CompositePoLine | Mapping[str, Any]],
) -> Adjustment | None:
    """Sum the adjustments of ``lines`` field by field.

    Returns ``None`` when no line carries an adjustment. Missing amounts count as
    zero, so every amount of the result is set. The inputs are left untouched.
    """

    adjustments = [
        adjustment for adjustment in map(_line_adjustment, lines) if adjustment is not None
    ]
    if not adjustments:
        return None
    return reduce(add_adjustments, adjustments, Adjustment())


def add_adjustments(left: Adjustment, right: Adjustment) -> Adjustment:
    return Adjustment(
        **{
            name: _accumulate(getattr(left, name), getattr(right, name))
            for name in ADJUSTMENT_AMOUNT_FIELDS
        }
    )


def _accumulate(left: float | None, right: float | None) -> float:
    if left is None:
        return 0.0 if right is None else right
    if right is None:
        return left
    return left + right


def _line_adjustment(line: CompositePoLine | Mapping[str, Any]) -> Adjustment | None:
    if isinstance(line, CompositePoLine):
        return line.adjustment
    value = line.get("adjustment")
    if value is None or isinstance(value, Adjustment):
        return value
    if isinstance(value, Mapping):
        return Adjustment.model_validate(value)
    raise TypeError(f"Line adjustment is not resolved: {value!r}")
