"""Domain port definitions for adapters."""

from __future__ import annotations

from .gateway import Operation, SubObjectGateway

__all__ = ["Operation", "SubObjectGateway"]
