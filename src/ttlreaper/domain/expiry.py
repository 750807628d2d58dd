"""Expiry and requeue arithmetic for finished operations.

All functions take ``now`` explicitly; callers decide which clock to read so
the arithmetic stays deterministic.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime, timedelta
from typing import Protocol

MIN_REQUEUE_DELAY = timedelta(seconds=1)


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def utcnow() -> datetime:
    return datetime.now(UTC)


def cleanup_time(ttl: timedelta, finished_at: datetime) -> datetime:
    """Return the instant after which a record finished at ``finished_at`` may go."""

    return finished_at + ttl


def is_expired(ttl: timedelta, finished_at: datetime, now: datetime) -> bool:
    """Return whether strictly more than ``ttl`` has passed since ``finished_at``."""

    return now - finished_at > ttl


def plan_requeue(ttl: timedelta, finished_at: datetime, now: datetime) -> timedelta:
    """Return how long to wait before checking a not yet expired record again.

    The remaining time is truncated to whole seconds and one second is added, so
    the follow-up check always lands after the real expiry instead of just
    before it.
    """

    remaining = cleanup_time(ttl, finished_at) - now
    delay = timedelta(seconds=math.floor(remaining.total_seconds()) + 1)
    return max(delay, MIN_REQUEUE_DELAY)


__all__ = ["MIN_REQUEUE_DELAY", "Clock", "cleanup_time", "is_expired", "plan_requeue", "utcnow"]
