from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from ttlreaper.adapters.sqlalchemy import SqlAlchemyResourceStore, create_all_tables
from ttlreaper.adapters.sqlalchemy.engine import shutdown, startup

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session_factory(sqlite_engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=sqlite_engine, expire_on_commit=False)


@pytest.fixture
def sqlite_store(sqlite_session_factory: sessionmaker[Session]) -> SqlAlchemyResourceStore:
    return SqlAlchemyResourceStore(sqlite_session_factory)


@pytest.fixture
def started_engine(sqlite_engine: Engine) -> Iterator[Engine]:
    startup(engine=sqlite_engine, force=True)
    try:
        yield sqlite_engine
    finally:
        shutdown()
