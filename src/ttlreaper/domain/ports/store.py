"""Port for the external store holding operation records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ttlreaper.domain.model import ObjectKey, OperationRecord


class StoreError(RuntimeError):
    """Raised when the resource store fails to serve a read or a delete."""

    def __init__(
        self,
        message: str,
        *,
        key: ObjectKey | None = None,
        operation: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.key = key
        self.operation = operation
        self.status_code = status_code


class NotFoundError(StoreError):
    """Raised when the requested record does not exist (any more)."""


@runtime_checkable
class ResourceStore(Protocol):
    """Read and delete access to operation records keyed by namespace and name."""

    def get(self, namespace: str, name: str) -> OperationRecord: ...

    def delete(self, namespace: str, name: str) -> None: ...


__all__ = ["NotFoundError", "ResourceStore", "StoreError"]
