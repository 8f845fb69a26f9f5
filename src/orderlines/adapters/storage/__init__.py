"""Orders storage adapter."""

from __future__ import annotations

from .context import RequestContext
from .gateway import StorageGateway

__all__ = ["RequestContext", "StorageGateway"]
