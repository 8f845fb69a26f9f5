from __future__ import annotations

import pytest

from orderlines.adapters.storage import RequestContext
from orderlines.config import (
    ConfigurationError,
    InvalidConfigurationError,
    MissingConfigurationError,
    get_storage_config,
    require_env_vars,
)

_ENV_VARS = (
    "OKAPI_URL",
    "OKAPI_TENANT",
    "OKAPI_TOKEN",
    "ORDERLINES_LANG",
    "ORDERLINES_MAX_CONCURRENCY",
    "ORDERLINES_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OKAPI_TENANT", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["OKAPI_URL", "OKAPI_TENANT"])

    assert "OKAPI_TENANT, OKAPI_URL" in str(exc.value)


def test_storage_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OKAPI_URL", "http://okapi.test/")
    monkeypatch.setenv("OKAPI_TENANT", "diku")
    monkeypatch.setenv("OKAPI_TOKEN", "token")
    monkeypatch.setenv("ORDERLINES_LANG", "de")
    monkeypatch.setenv("ORDERLINES_MAX_CONCURRENCY", "16")
    monkeypatch.setenv("ORDERLINES_TIMEOUT_SECONDS", "5")

    config = get_storage_config()

    assert config.resilience.base_url == "http://okapi.test"
    assert config.resilience.timeout_seconds == 5.0
    assert config.resilience.pool.max_connections == 16
    assert "POST" not in config.resilience.retry.allowed_methods
    assert config.tenant == "diku"
    assert config.token == "token"
    assert config.lang == "de"
    assert config.max_concurrency == 16


def test_storage_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OKAPI_URL", "http://okapi.test")
    monkeypatch.setenv("OKAPI_TENANT", "diku")

    config = get_storage_config()

    assert config.lang == "en"
    assert config.max_concurrency is None
    assert config.token is None
    assert config.line_list_limit == 999


def test_storage_config_rejects_bad_concurrency(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OKAPI_URL", "http://okapi.test")
    monkeypatch.setenv("OKAPI_TENANT", "diku")
    monkeypatch.setenv("ORDERLINES_MAX_CONCURRENCY", "0")

    with pytest.raises(ConfigurationError, match="ORDERLINES_MAX_CONCURRENCY"):
        get_storage_config()


def test_storage_config_requires_url_and_tenant() -> None:
    with pytest.raises(MissingConfigurationError):
        get_storage_config()


def test_request_context_from_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OKAPI_URL", "http://okapi.test")
    monkeypatch.setenv("OKAPI_TENANT", "diku")
    monkeypatch.setenv("OKAPI_TOKEN", "token")

    context = RequestContext.from_config(get_storage_config())

    assert context.okapi_url == "http://okapi.test"
    assert context.tenant == "diku"
    assert context.headers["X-Okapi-Token"] == "token"
    assert context.lang == "en"


def test_storage_config_rejects_unparsable_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OKAPI_URL", "http://okapi.test")
    monkeypatch.setenv("OKAPI_TENANT", "diku")
    monkeypatch.setenv("ORDERLINES_TIMEOUT_SECONDS", "soon")

    with pytest.raises(InvalidConfigurationError) as exc:
        get_storage_config()

    assert exc.value.name == "ORDERLINES_TIMEOUT_SECONDS"
