"""Request context propagated to every storage call."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from orderlines.config.storage import (
    DEFAULT_LANG,
    OKAPI_TENANT_HEADER,
    OKAPI_URL_HEADER,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from orderlines.config.storage import StorageConfig


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Headers of the incoming request, forwarded untouched to storage."""

    headers: Mapping[str, str] = field(default_factory=dict)
    lang: str = DEFAULT_LANG

    @classmethod
    def from_config(cls, config: StorageConfig) -> RequestContext:
        return cls(headers=config.request_headers(), lang=config.lang)

    @property
    def okapi_url(self) -> str | None:
        return self._header(OKAPI_URL_HEADER)

    @property
    def tenant(self) -> str | None:
        return self._header(OKAPI_TENANT_HEADER)

    def _header(self, name: str) -> str | None:
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None
