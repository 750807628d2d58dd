"""Translate operation custom resource payloads into domain records."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime

from ttlreaper.domain.model import ErrorPolicy, ObjectKey, OperationRecord, TaskState

from .schema import OperationPayload

type OperationPayloadInput = OperationPayload | Mapping[str, object]


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _task_state(value: str | None) -> TaskState:
    if value is None:
        return TaskState.CREATED
    try:
        return TaskState(value)
    except ValueError:
        return TaskState.UNKNOWN


def _error_policy(value: str | None) -> ErrorPolicy:
    if value is None:
        return ErrorPolicy.RETRY
    try:
        return ErrorPolicy(value.lower())
    except ValueError:
        return ErrorPolicy.RETRY


def parse_operation(payload: OperationPayloadInput) -> OperationRecord:
    """Validate ``payload`` if needed and convert it into an ``OperationRecord``."""

    model = (
        payload
        if isinstance(payload, OperationPayload)
        else OperationPayload.model_validate(payload)
    )
    task = model.status.current_task
    return OperationRecord(
        key=ObjectKey(namespace=model.metadata.namespace, name=model.metadata.name),
        uid=model.metadata.uid,
        task_state=_task_state(task.state if task else None),
        error_policy=_error_policy(model.spec.error_policy),
        ttl_seconds_after_finished=model.spec.ttl_seconds_after_finished,
        current_task_finished_at=_as_utc(task.finished if task else None),
        deletion_requested_at=_as_utc(model.metadata.deletion_timestamp),
        annotations=dict(model.metadata.annotations),
    )
