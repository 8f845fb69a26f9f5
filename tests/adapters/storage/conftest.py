"""Shared fixtures for storage gateway tests."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from orderlines.adapters.http_resilience import ResilientClient
from orderlines.adapters.storage import StorageGateway
from orderlines.config.http_resilience import ResilienceConfig, RetryPolicy
from orderlines.config.storage import DEFAULT_STORAGE_HEADERS

Handler = Callable[[httpx.Request], httpx.Response]

BASE_URL = "http://storage.test"
TENANT_HEADERS = {"X-Okapi-Tenant": "diku", "X-Okapi-Token": "secret"}


@pytest.fixture
def resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="orders-storage",
        base_url=BASE_URL,
        retry=RetryPolicy(total=0),
        default_headers=DEFAULT_STORAGE_HEADERS,
    )


@pytest.fixture
def make_gateway(resilience: ResilienceConfig) -> Callable[[Handler], StorageGateway]:
    def factory(handler: Handler) -> StorageGateway:
        transport = httpx.MockTransport(handler)
        return StorageGateway(
            resilience=resilience,
            headers=TENANT_HEADERS,
            client_factory=lambda config: ResilientClient(config, transport=transport),
        )

    return factory
