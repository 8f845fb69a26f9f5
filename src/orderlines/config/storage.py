"""Orders storage configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from orderlines.domain.aggregator import DEFAULT_LINE_LIST_LIMIT

from .env import optional_env_var, optional_positive_float, optional_positive_int, require_env_vars
from .http_resilience import ConnectionPool, ResilienceConfig, RetryPolicy

DEFAULT_LANG = "en"
DEFAULT_TIMEOUT_SECONDS = 30.0

OKAPI_URL_HEADER = "X-Okapi-Url"
OKAPI_TENANT_HEADER = "X-Okapi-Tenant"
OKAPI_TOKEN_HEADER = "X-Okapi-Token"

# Some storage calls answer without a body; the storage API requires Accept anyway.
DEFAULT_STORAGE_HEADERS = {"Accept": "application/json, text/plain"}


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Settings for talking to the orders storage API."""

    resilience: ResilienceConfig
    tenant: str
    token: str | None = None
    lang: str = DEFAULT_LANG
    max_concurrency: int | None = None
    line_list_limit: int = DEFAULT_LINE_LIST_LIMIT

    def request_headers(self) -> dict[str, str]:
        """Headers an outer layer would normally propagate with every request."""

        headers = {OKAPI_TENANT_HEADER: self.tenant}
        if self.resilience.base_url is not None:
            headers[OKAPI_URL_HEADER] = self.resilience.base_url
        if self.token is not None:
            headers[OKAPI_TOKEN_HEADER] = self.token
        return headers


def default_storage_resilience(
    *,
    base_url: str | None = None,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    max_connections: int | None = None,
) -> ResilienceConfig:
    """Storage client settings; the pool is sized to the fan-out limit when one is set."""

    return ResilienceConfig(
        name="orders-storage",
        base_url=base_url,
        timeout_seconds=timeout_seconds,
        retry=RetryPolicy(),
        pool=ConnectionPool(max_connections=max_connections),
        default_headers=DEFAULT_STORAGE_HEADERS,
    )


def get_storage_config(*, resilience: ResilienceConfig | None = None) -> StorageConfig:
    values = require_env_vars(("OKAPI_URL", "OKAPI_TENANT"))
    timeout = optional_positive_float("ORDERLINES_TIMEOUT_SECONDS") or DEFAULT_TIMEOUT_SECONDS
    max_concurrency = optional_positive_int("ORDERLINES_MAX_CONCURRENCY")
    return StorageConfig(
        resilience=resilience
        or default_storage_resilience(
            base_url=values["OKAPI_URL"].rstrip("/"),
            timeout_seconds=timeout,
            max_connections=max_concurrency,
        ),
        tenant=values["OKAPI_TENANT"],
        token=optional_env_var("OKAPI_TOKEN"),
        lang=optional_env_var("ORDERLINES_LANG") or DEFAULT_LANG,
        max_concurrency=max_concurrency,
    )
