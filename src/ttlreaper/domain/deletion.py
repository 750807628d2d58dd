"""Idempotent deletion of expired operation records."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from ttlreaper.domain.ports.store import NotFoundError

if TYPE_CHECKING:
    from ttlreaper.domain.model import ObjectKey
    from ttlreaper.domain.ports.store import ResourceStore

log = getLogger(__name__)


@dataclass(slots=True)
class DeletionExecutor:
    """Delete records by key, treating an already missing record as deleted.

    Any other ``StoreError`` propagates to the caller unchanged.
    """

    store: ResourceStore

    def delete(self, key: ObjectKey) -> None:
        try:
            self.store.delete(key.namespace, key.name)
        except NotFoundError:
            log.debug("Operation %s already gone, nothing to delete", key)
            return
        log.info("Deleted finished operation %s", key)
