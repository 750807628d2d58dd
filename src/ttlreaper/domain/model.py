"""Operation records as seen by the TTL reconciler."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime


class TaskState(StrEnum):
    """Lifecycle state of the task currently attached to an operation."""

    CREATED = "Created"
    ACTIVE = "Active"
    IN_EXECUTION = "InExecution"
    COMPLETED = "Completed"
    COMPLETED_WITH_ERROR = "CompletedWithError"
    UNKNOWN = "Unknown"


class ErrorPolicy(StrEnum):
    """What the operation owner does when a task completes with an error."""

    RETRY = "retry"
    IGNORE = "ignore"


@dataclass(frozen=True, slots=True, order=True)
class ObjectKey:
    """Unique identity of a record inside the resource store."""

    namespace: str
    name: str

    def __post_init__(self) -> None:
        if not self.namespace or not self.name:
            raise ValueError("Object keys require both a namespace and a name")
        if "/" in self.namespace or "/" in self.name:
            raise ValueError(f"Object key parts must not contain '/': {self}")

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"

    @classmethod
    def parse(cls, value: str) -> ObjectKey:
        namespace, sep, name = value.strip().partition("/")
        if not sep:
            raise ValueError(f"Invalid object key (expected namespace/name): {value}")
        return cls(namespace=namespace, name=name)


@dataclass(frozen=True, slots=True, kw_only=True)
class OperationRecord:
    """Externally owned operation resource.

    Only the fields the reconciler reads are modelled. ``ttl_seconds_after_finished``
    set to ``None`` means the record is never collected, and
    ``current_task_finished_at`` set to ``None`` means the current task has not
    finished yet.
    """

    key: ObjectKey
    uid: str | None = None
    task_state: TaskState = TaskState.CREATED
    error_policy: ErrorPolicy = ErrorPolicy.RETRY
    ttl_seconds_after_finished: int | None = None
    current_task_finished_at: datetime | None = None
    deletion_requested_at: datetime | None = None
    annotations: Mapping[str, str] = field(default_factory=dict[str, str], hash=False)

    def __post_init__(self) -> None:
        if self.ttl_seconds_after_finished is not None and self.ttl_seconds_after_finished < 0:
            raise ValueError("ttl_seconds_after_finished must be non-negative")
        for value in (self.current_task_finished_at, self.deletion_requested_at):
            if value is not None and value.tzinfo is None:
                raise ValueError("Record timestamps must include timezone information")

    @property
    def finished(self) -> bool:
        if self.task_state is TaskState.COMPLETED:
            return True
        return (
            self.task_state is TaskState.COMPLETED_WITH_ERROR
            and self.error_policy is ErrorPolicy.IGNORE
        )

    @property
    def deletion_requested(self) -> bool:
        return self.deletion_requested_at is not None


__all__ = ["ErrorPolicy", "ObjectKey", "OperationRecord", "TaskState"]
