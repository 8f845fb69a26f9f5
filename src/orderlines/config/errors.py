"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when orderlines cannot be configured from its environment."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required variables are absent or blank."""


class InvalidConfigurationError(ConfigurationError):
    """Raised when a variable is set to a value that cannot be used."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"{name} {reason}")
        self.name = name
