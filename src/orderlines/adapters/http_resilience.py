"""Pooled async HTTP client shared by every call of one storage gateway."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, TypedDict, Unpack

import httpx
from aiolimiter import AsyncLimiter
from httpx_retries import Retry, RetryTransport

if TYPE_CHECKING:
    from types import TracebackType

    from httpx._types import HeaderTypes, QueryParamTypes, URLTypes

    from orderlines.config.http_resilience import ResilienceConfig, RetryPolicy

log = getLogger(__name__)


class RequestOptions(TypedDict, total=False):
    json: object
    params: QueryParamTypes | None
    headers: HeaderTypes | None


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=tuple(policy.allowed_methods),
        status_forcelist=tuple(policy.status_forcelist),
        retry_on_exceptions=policy.retry_on_exceptions,
        backoff_jitter=policy.backoff_jitter,
    )


def build_timeout(config: ResilienceConfig) -> httpx.Timeout:
    return httpx.Timeout(
        config.timeout_seconds,
        connect=config.connect_timeout_seconds or config.timeout_seconds,
    )


class ResilientClient:
    """``httpx.AsyncClient`` behind a retry transport and an optional rate limit.

    The pool limits of ``config.pool`` apply to the network transport built here.
    A ``transport`` passed in replaces that transport underneath the retry layer,
    which is how tests plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._limiter: AsyncLimiter | None = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit
            else None
        )
        network = transport or httpx.AsyncHTTPTransport(limits=config.pool.limits())
        self._client = httpx.AsyncClient(
            base_url=config.base_url or "",
            timeout=build_timeout(config),
            headers=dict(config.default_headers) if config.default_headers else None,
            event_hooks={"response": list(config.response_hooks)},
            transport=RetryTransport(transport=network, retry=build_retry(config.retry)),
        )
        log.debug("Opened HTTP client %r for %s", config.name, config.base_url)

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()
        log.debug("Closed HTTP client %r", self.config.name)

    async def request(
        self,
        method: str,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        if self._limiter is None:
            return await self._client.request(method, url, **kwargs)
        async with self._limiter:
            return await self._client.request(method, url, **kwargs)
