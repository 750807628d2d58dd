"""Domain port definitions for adapters."""

from __future__ import annotations

from .store import NotFoundError, ResourceStore, StoreError

__all__ = ["NotFoundError", "ResourceStore", "StoreError"]
