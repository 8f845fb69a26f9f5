"""Retry, rate limit and connection pool settings for storage HTTP clients."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Mapping

ResponseHook = Callable[[httpx.Response], Awaitable[None] | None]

# POST is left out: storage assigns the id of a created record.
IDEMPOTENT_METHODS = frozenset({"DELETE", "GET", "HEAD", "OPTIONS", "PUT"})

# 500 is how storage reports most business rule violations.
TRANSIENT_STATUSES = frozenset({429, 502, 503, 504})


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    total: int = 3
    backoff_factor: float = 0.5
    max_backoff_wait: float = 30.0
    respect_retry_after_header: bool = True
    allowed_methods: frozenset[str] = IDEMPOTENT_METHODS
    status_forcelist: frozenset[int] = TRANSIENT_STATUSES
    retry_on_exceptions: tuple[type[httpx.HTTPError], ...] = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )
    backoff_jitter: float = 1.0


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class ConnectionPool:
    """Connection limits of the pooled client; ``None`` leaves httpx's default."""

    max_connections: int | None = None
    max_keepalive_connections: int | None = None
    keepalive_expiry: float = 5.0

    def limits(self) -> httpx.Limits:
        defaults = httpx.Limits()
        return httpx.Limits(
            max_connections=self.max_connections or defaults.max_connections,
            max_keepalive_connections=(
                self.max_keepalive_connections or defaults.max_keepalive_connections
            ),
            keepalive_expiry=self.keepalive_expiry,
        )


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    connect_timeout_seconds: float | None = None
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    pool: ConnectionPool = field(default_factory=ConnectionPool)
    response_hooks: tuple[ResponseHook, ...] = field(default_factory=tuple)
    default_headers: Mapping[str, str] | None = None
