"""Domain core of the TTL reconciler."""

from __future__ import annotations

from .deletion import DeletionExecutor
from .events import (
    CreateEvent,
    DeleteEvent,
    EventFilter,
    ResourceEvent,
    UpdateEvent,
    admit,
    skip_annotated,
)
from .expiry import Clock, cleanup_time, is_expired, plan_requeue
from .model import ErrorPolicy, ObjectKey, OperationRecord, TaskState
from .reconciler import TTLReconciler
from .results import Done, Failed, ReconcileResult, RequeueAfter

__all__ = [
    "Clock",
    "CreateEvent",
    "DeleteEvent",
    "DeletionExecutor",
    "Done",
    "ErrorPolicy",
    "EventFilter",
    "Failed",
    "ObjectKey",
    "OperationRecord",
    "ReconcileResult",
    "RequeueAfter",
    "ResourceEvent",
    "TTLReconciler",
    "TaskState",
    "UpdateEvent",
    "admit",
    "cleanup_time",
    "is_expired",
    "plan_requeue",
    "skip_annotated",
]
