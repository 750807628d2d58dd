"""Application orchestration entry points."""

from __future__ import annotations

from contextlib import AbstractContextManager, ExitStack
from logging import getLogger
from typing import TYPE_CHECKING, assert_never

from ttlreaper.adapters.kubernetes import KubernetesResourceStore
from ttlreaper.adapters.sqlalchemy import SqlAlchemyResourceStore, is_started, startup
from ttlreaper.config import get_reconciler_config
from ttlreaper.domain.events import EventFilter, skip_annotated
from ttlreaper.domain.expiry import utcnow
from ttlreaper.domain.reconciler import TTLReconciler
from ttlreaper.domain.results import Done, Failed, RequeueAfter

if TYPE_CHECKING:
    from ttlreaper.config import ReconcilerConfig, StoreBackend
    from ttlreaper.domain.events import ResourceEvent
    from ttlreaper.domain.expiry import Clock
    from ttlreaper.domain.model import ObjectKey
    from ttlreaper.domain.ports.store import ResourceStore
    from ttlreaper.domain.results import ReconcileResult

log = getLogger(__name__)


def build_store(backend: StoreBackend) -> ResourceStore:
    """Return the resource store adapter selected by ``backend``."""

    match backend:
        case "sqlite":
            if not is_started():
                startup()
            return SqlAlchemyResourceStore()
        case "kubernetes":
            return KubernetesResourceStore()
        case _:
            assert_never(backend)


def build_event_filter(config: ReconcilerConfig | None = None) -> EventFilter:
    effective = config or get_reconciler_config()
    if effective.skip_annotation is None:
        return EventFilter()
    return EventFilter(extra=(skip_annotated(effective.skip_annotation),))


def should_enqueue(event: ResourceEvent, *, event_filter: EventFilter | None = None) -> bool:
    """Return whether ``event`` should be handed to the work queue."""

    effective_filter = event_filter or build_event_filter()
    admitted = effective_filter(event)
    log.debug("Event %s admitted=%s", event.kind, admitted)
    return admitted


def reconcile_operation(
    key: ObjectKey,
    *,
    store: ResourceStore | None = None,
    backend: StoreBackend | None = None,
    clock: Clock = utcnow,
) -> ReconcileResult:
    """Run one reconcile pass for ``key`` and log what the scheduler should do next.

    Without an explicit ``store`` one is built from ``backend`` (or the configured
    backend) and closed again once the pass is over.
    """

    with ExitStack() as stack:
        if store is None:
            store = build_store(backend or get_reconciler_config().store)
            if isinstance(store, AbstractContextManager):
                stack.enter_context(store)
        result = TTLReconciler(store=store, clock=clock).reconcile(key)

    match result:
        case Done():
            log.info("Operation %s reconciled", key)
        case RequeueAfter(delay=delay):
            log.info(
                "Operation %s not expired yet, requeue after %ss",
                key,
                int(delay.total_seconds()),
            )
        case Failed(error=error):
            log.error(
                "Reconcile of operation %s failed during %s: %s",
                key,
                error.operation,
                error,
            )
        case _:
            assert_never(result)

    return result
