"""Errors raised while assembling ttlreaper settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class ConfigurationError(RuntimeError):
    """A setting could not be turned into a usable value."""

    def __init__(self, message: str, *, env_var: str | None = None) -> None:
        super().__init__(message)
        self.env_var = env_var


class MissingConfigurationError(ConfigurationError):
    """Required environment variables are unset or blank."""

    def __init__(self, names: Sequence[str]) -> None:
        self.names = tuple(sorted(names))
        super().__init__(f"Missing configuration for: {', '.join(self.names)}")
