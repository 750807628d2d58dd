"""Change notifications and the predicates deciding which ones get reconciled."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Literal, assert_never

if TYPE_CHECKING:
    from ttlreaper.domain.model import OperationRecord


class EventType(StrEnum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class CreateEvent:
    obj: OperationRecord
    kind: Literal[EventType.CREATE] = EventType.CREATE


@dataclass(frozen=True, slots=True)
class UpdateEvent:
    old: OperationRecord
    new: OperationRecord
    kind: Literal[EventType.UPDATE] = EventType.UPDATE


@dataclass(frozen=True, slots=True)
class DeleteEvent:
    obj: OperationRecord
    kind: Literal[EventType.DELETE] = EventType.DELETE


type ResourceEvent = CreateEvent | UpdateEvent | DeleteEvent
type EventPredicate = Callable[[ResourceEvent], bool]


def is_collectable(record: OperationRecord) -> bool:
    """Return whether ``record`` can ever expire from its current state."""

    return (
        record.finished
        and record.ttl_seconds_after_finished is not None
        and not record.deletion_requested
    )


def event_object(event: ResourceEvent) -> OperationRecord:
    """Return the most recent state carried by ``event``."""

    match event:
        case CreateEvent(obj=obj) | DeleteEvent(obj=obj):
            return obj
        case UpdateEvent(new=new):
            return new
        case _:
            assert_never(event)


def admit(event: ResourceEvent) -> bool:
    """Decide whether ``event`` is worth a reconcile."""

    match event:
        case CreateEvent(obj=obj):
            return is_collectable(obj)
        case UpdateEvent(new=new):
            return is_collectable(new)
        case DeleteEvent():
            return False
        case _:
            assert_never(event)


def skip_annotated(annotation: str) -> EventPredicate:
    """Build a predicate rejecting events whose object carries ``annotation``."""

    def predicate(event: ResourceEvent) -> bool:
        return annotation not in event_object(event).annotations

    return predicate


@dataclass(frozen=True, slots=True)
class EventFilter:
    """``admit`` combined with any number of extra predicates; all must agree."""

    extra: Sequence[EventPredicate] = field(default_factory=tuple[EventPredicate, ...])

    def __call__(self, event: ResourceEvent) -> bool:
        if not admit(event):
            return False
        return all(predicate(event) for predicate in self.extra)


__all__ = [
    "CreateEvent",
    "DeleteEvent",
    "EventFilter",
    "EventPredicate",
    "EventType",
    "ResourceEvent",
    "UpdateEvent",
    "admit",
    "event_object",
    "is_collectable",
    "skip_annotated",
]
