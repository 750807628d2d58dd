"""SQLAlchemy adapter package for ttlreaper."""

from __future__ import annotations

from .engine import StartupError, configured_engine, is_started, shutdown, startup
from .mappings import create_all_tables, metadata, operation_record_table
from .store import SqlAlchemyResourceStore

__all__ = [
    "SqlAlchemyResourceStore",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "metadata",
    "operation_record_table",
    "shutdown",
    "startup",
]
