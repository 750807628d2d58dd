"""Tests for the SQLAlchemy resource store."""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.exc import OperationalError

from tests.helpers.operations import DEFAULT_KEY, NOW, fixed_clock, make_operation
from ttlreaper.adapters.sqlalchemy import SqlAlchemyResourceStore
from ttlreaper.domain.model import ErrorPolicy, ObjectKey, TaskState
from ttlreaper.domain.ports.store import NotFoundError, ResourceStore, StoreError
from ttlreaper.domain.reconciler import TTLReconciler
from ttlreaper.domain.results import Done, RequeueAfter

if TYPE_CHECKING:
    from sqlalchemy.orm import Session, sessionmaker


def test_store_satisfies_port(sqlite_store: SqlAlchemyResourceStore) -> None:
    assert isinstance(sqlite_store, ResourceStore)


def test_saved_record_round_trips(sqlite_store: SqlAlchemyResourceStore) -> None:
    record = make_operation(
        state=TaskState.COMPLETED_WITH_ERROR,
        error_policy=ErrorPolicy.IGNORE,
        annotations={"owner": "ops"},
    )
    sqlite_store.save(record)

    loaded = sqlite_store.get(DEFAULT_KEY.namespace, DEFAULT_KEY.name)

    assert loaded == record
    assert loaded.finished is True


def test_save_replaces_existing_record(sqlite_store: SqlAlchemyResourceStore) -> None:
    sqlite_store.save(make_operation(ttl=60))
    sqlite_store.save(make_operation(ttl=None))

    loaded = sqlite_store.get(DEFAULT_KEY.namespace, DEFAULT_KEY.name)

    assert loaded.ttl_seconds_after_finished is None


def test_get_missing_record_raises_not_found(sqlite_store: SqlAlchemyResourceStore) -> None:
    with pytest.raises(NotFoundError):
        sqlite_store.get("kafka", "missing")


def test_delete_is_reported_once(sqlite_store: SqlAlchemyResourceStore) -> None:
    sqlite_store.save(make_operation())

    sqlite_store.delete(DEFAULT_KEY.namespace, DEFAULT_KEY.name)

    with pytest.raises(NotFoundError):
        sqlite_store.delete(DEFAULT_KEY.namespace, DEFAULT_KEY.name)
    with pytest.raises(NotFoundError):
        sqlite_store.get(DEFAULT_KEY.namespace, DEFAULT_KEY.name)


def test_database_errors_become_store_errors(
    sqlite_session_factory: sessionmaker[Session],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    store = SqlAlchemyResourceStore(sqlite_session_factory)

    def broken_factory() -> Session:
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr(store, "session_factory", broken_factory)

    with pytest.raises(StoreError) as excinfo:
        store.get("kafka", "any")

    assert not isinstance(excinfo.value, NotFoundError)
    assert excinfo.value.operation == "get"


def test_reconciler_cleans_up_sql_records(sqlite_store: SqlAlchemyResourceStore) -> None:
    expired = make_operation()
    fresh_key = ObjectKey("kafka", "fresh")
    fresh = make_operation(key=fresh_key, finished_ago=timedelta(seconds=10))
    sqlite_store.save(expired)
    sqlite_store.save(fresh)
    reconciler = TTLReconciler(store=sqlite_store, clock=fixed_clock(NOW))

    assert reconciler.reconcile(DEFAULT_KEY) == Done()
    assert reconciler.reconcile(fresh_key) == RequeueAfter(timedelta(seconds=51))
    assert sqlite_store.get(fresh_key.namespace, fresh_key.name) == fresh
