"""Outcomes handed back to the scheduler after one reconcile pass."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import StrEnum
from typing import Literal

from ttlreaper.domain.ports.store import StoreError


class ResultKind(StrEnum):
    DONE = "done"
    REQUEUE_AFTER = "requeue_after"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class Done:
    """Nothing left to do for this key."""

    kind: Literal[ResultKind.DONE] = ResultKind.DONE


@dataclass(frozen=True, slots=True)
class RequeueAfter:
    """Check the key again once ``delay`` has passed; not an error."""

    delay: timedelta
    kind: Literal[ResultKind.REQUEUE_AFTER] = ResultKind.REQUEUE_AFTER

    def __post_init__(self) -> None:
        if self.delay < timedelta(seconds=1):
            raise ValueError("Requeue delay must be at least one second")


@dataclass(frozen=True, slots=True)
class Failed:
    """The pass failed; the scheduler retries according to its own backoff."""

    error: StoreError
    kind: Literal[ResultKind.FAILED] = ResultKind.FAILED


type ReconcileResult = Done | RequeueAfter | Failed


__all__ = ["Done", "Failed", "ReconcileResult", "RequeueAfter", "ResultKind"]
