"""Reconciler runtime settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal, cast

from .env import optional_env_var
from .errors import ConfigurationError

type StoreBackend = Literal["sqlite", "kubernetes"]

STORE_BACKENDS: Final[tuple[str, ...]] = ("sqlite", "kubernetes")
DEFAULT_STORE_BACKEND: Final[str] = "sqlite"
STORE_ENV_VAR: Final[str] = "TTLREAPER_STORE"


@dataclass(frozen=True, slots=True)
class ReconcilerConfig:
    store: StoreBackend = "sqlite"
    skip_annotation: str | None = None


def parse_store_backend(value: str, *, env_var: str | None = None) -> StoreBackend:
    normalized = value.strip().lower()
    if normalized not in STORE_BACKENDS:
        choices = ", ".join(STORE_BACKENDS)
        raise ConfigurationError(
            f"Unsupported store backend {value!r} (expected one of {choices})", env_var=env_var
        )
    return cast("StoreBackend", normalized)


def get_reconciler_config() -> ReconcilerConfig:
    store = parse_store_backend(
        optional_env_var(STORE_ENV_VAR) or DEFAULT_STORE_BACKEND, env_var=STORE_ENV_VAR
    )
    return ReconcilerConfig(
        store=store,
        skip_annotation=optional_env_var("TTLREAPER_SKIP_ANNOTATION"),
    )
