"""Application configuration helpers."""

from __future__ import annotations

from .env import require_env_vars
from .errors import ConfigurationError, InvalidConfigurationError, MissingConfigurationError
from .http_resilience import ConnectionPool, RateLimit, ResilienceConfig, RetryPolicy
from .storage import (
    OKAPI_TENANT_HEADER,
    OKAPI_TOKEN_HEADER,
    OKAPI_URL_HEADER,
    StorageConfig,
    default_storage_resilience,
    get_storage_config,
)

__all__ = [
    "OKAPI_TENANT_HEADER",
    "OKAPI_TOKEN_HEADER",
    "OKAPI_URL_HEADER",
    "ConfigurationError",
    "ConnectionPool",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "default_storage_resilience",
    "get_storage_config",
    "require_env_vars",
]
