"""TTL reconciler for finished operation records.

One call to :meth:`TTLReconciler.reconcile` makes a single pass over freshly
read state:

1. fetch the record (a missing record means there is nothing to do)
2. skip records without a TTL or without a finished task
3. delete the record if its TTL has elapsed
4. otherwise ask to be called again once it will have

Nothing is kept between calls, so redelivery, restarts and replicas working on
different keys are all safe.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from logging import getLogger
from typing import TYPE_CHECKING

from ttlreaper.domain.deletion import DeletionExecutor
from ttlreaper.domain.expiry import cleanup_time, is_expired, plan_requeue, utcnow
from ttlreaper.domain.ports.store import NotFoundError, StoreError
from ttlreaper.domain.results import Done, Failed, ReconcileResult, RequeueAfter

if TYPE_CHECKING:
    from ttlreaper.domain.expiry import Clock
    from ttlreaper.domain.model import ObjectKey
    from ttlreaper.domain.ports.store import ResourceStore

log = getLogger(__name__)


@dataclass(slots=True)
class TTLReconciler:
    """Drive TTL based cleanup of one operation record per call."""

    store: ResourceStore
    clock: Clock = utcnow
    _deleter: DeletionExecutor = field(init=False)

    def __post_init__(self) -> None:
        self._deleter = DeletionExecutor(self.store)

    def reconcile(self, key: ObjectKey) -> ReconcileResult:
        log.debug("Reconciling operation %s", key)

        try:
            record = self.store.get(key.namespace, key.name)
        except NotFoundError:
            # deleted after the request was queued
            return Done()
        except StoreError as exc:
            return _requeue_with_error(key, "get", exc)

        ttl_seconds = record.ttl_seconds_after_finished
        finished_at = record.current_task_finished_at
        if ttl_seconds is None or finished_at is None:
            return Done()

        ttl = timedelta(seconds=ttl_seconds)
        now = self.clock()
        expires_at = cleanup_time(ttl, finished_at)

        if is_expired(ttl, finished_at, now):
            log.debug(
                "Cleaning up finished operation %s: finished=%s, cleanup_time=%s",
                key,
                finished_at,
                expires_at,
            )
            try:
                self._deleter.delete(key)
            except StoreError as exc:
                return _requeue_with_error(key, "delete", exc)
            return Done()

        delay = plan_requeue(ttl, finished_at, now)
        log.debug(
            "Requeueing operation %s in %s: cleanup_time=%s",
            key,
            delay,
            expires_at,
        )
        return RequeueAfter(delay)


def _requeue_with_error(key: ObjectKey, operation: str, error: StoreError) -> Failed:
    if error.key is None:
        error.key = key
    if error.operation is None:
        error.operation = operation
    log.warning("Failed to %s operation %s: %s", operation, key, error)
    return Failed(error)


__all__ = ["TTLReconciler"]
