"""Shared logging helpers for ttlreaper."""

from __future__ import annotations

import logging

from .env import optional_env_var
from .errors import ConfigurationError

LOG_LEVEL_ENV_VAR = "TTLREAPER_LOG_LEVEL"


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: the level
    defaults to ``TTLREAPER_LOG_LEVEL`` (or INFO) and the format is terse enough for
    a background process. Pass ``force=True`` to reconfigure during tests.
    """

    logging.basicConfig(
        level=level if level is not None else get_log_level(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )


def get_log_level() -> int:
    raw = optional_env_var(LOG_LEVEL_ENV_VAR)
    if raw is None:
        return logging.INFO
    level = logging.getLevelNamesMapping().get(raw.upper())
    if level is None:
        raise ConfigurationError(
            f"Invalid log level in {LOG_LEVEL_ENV_VAR}: {raw}", env_var=LOG_LEVEL_ENV_VAR
        )
    return level
