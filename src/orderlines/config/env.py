"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import InvalidConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Return the given environment variables or raise if any are missing/blank."""

    missing: list[str] = []
    values: dict[str, str] = {}
    for name in names:
        value = optional_env_var(name)
        if value is None:
            missing.append(name)
            continue
        values[name] = value

    if missing:
        missing_list = ", ".join(sorted(missing))
        raise MissingConfigurationError(f"Missing configuration for: {missing_list}")

    return values


def optional_env_var(name: str) -> str | None:
    """Return a stripped environment variable, treating blank values as unset."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def optional_positive_int(name: str) -> int | None:
    return _optional_positive(name, int, "an integer")


def optional_positive_float(name: str) -> float | None:
    return _optional_positive(name, float, "a number")


def _optional_positive[N: (int, float)](
    name: str,
    parse: Callable[[str], N],
    expected: str,
) -> N | None:
    value = optional_env_var(name)
    if value is None:
        return None
    try:
        parsed = parse(value)
    except ValueError as exc:
        raise InvalidConfigurationError(name, f"must be {expected}, got {value!r}") from exc
    if parsed <= 0:
        raise InvalidConfigurationError(name, f"must be positive, got {parsed}")
    return parsed
