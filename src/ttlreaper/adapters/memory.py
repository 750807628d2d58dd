"""Dict-backed resource store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ttlreaper.domain.model import ObjectKey, OperationRecord
from ttlreaper.domain.ports.store import NotFoundError


@dataclass(slots=True)
class InMemoryResourceStore:
    """Keep records in a dict and remember every delete call it receives."""

    records: dict[ObjectKey, OperationRecord] = field(
        default_factory=dict[ObjectKey, OperationRecord]
    )
    delete_calls: list[ObjectKey] = field(default_factory=list[ObjectKey])

    def put(self, record: OperationRecord) -> None:
        self.records[record.key] = record

    def get(self, namespace: str, name: str) -> OperationRecord:
        key = ObjectKey(namespace, name)
        try:
            return self.records[key]
        except KeyError:
            raise NotFoundError(f"Operation {key} not found", key=key, operation="get") from None

    def delete(self, namespace: str, name: str) -> None:
        key = ObjectKey(namespace, name)
        self.delete_calls.append(key)
        if self.records.pop(key, None) is None:
            raise NotFoundError(f"Operation {key} not found", key=key, operation="delete")


if TYPE_CHECKING:
    from ttlreaper.domain.ports.store import ResourceStore

    _store_check: ResourceStore = InMemoryResourceStore()
