"""Resource store backed by a SQL database."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import SQLAlchemyError

from ttlreaper.adapters.sqlalchemy.engine import session_factory as default_session_factory
from ttlreaper.adapters.sqlalchemy.mappings import (
    operation_record_table,
    record_to_row,
    row_to_record,
)
from ttlreaper.domain.model import ObjectKey, OperationRecord
from ttlreaper.domain.ports.store import NotFoundError, StoreError

if TYPE_CHECKING:
    from sqlalchemy.orm import Session, sessionmaker

log = getLogger(__name__)


class SqlAlchemyResourceStore:
    """Read and delete operation records, one short transaction per call."""

    def __init__(self, session_factory: sessionmaker[Session] | None = None) -> None:
        self.session_factory = session_factory or default_session_factory()

    def get(self, namespace: str, name: str) -> OperationRecord:
        key = ObjectKey(namespace, name)
        stmt = select(operation_record_table).where(
            operation_record_table.c.namespace == namespace,
            operation_record_table.c.name == name,
        )
        try:
            with self.session_factory() as session:
                row = session.execute(stmt).mappings().one_or_none()
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to read operation {key}", key=key, operation="get") from exc
        if row is None:
            raise NotFoundError(f"Operation {key} not found", key=key, operation="get")
        return row_to_record(row)

    def delete(self, namespace: str, name: str) -> None:
        key = ObjectKey(namespace, name)
        stmt = delete(operation_record_table).where(
            operation_record_table.c.namespace == namespace,
            operation_record_table.c.name == name,
        )
        try:
            with self.session_factory() as session, session.begin():
                deleted = session.execute(stmt).rowcount
        except SQLAlchemyError as exc:
            raise StoreError(
                f"Failed to delete operation {key}", key=key, operation="delete"
            ) from exc
        if not deleted:
            raise NotFoundError(f"Operation {key} not found", key=key, operation="delete")

    def save(self, record: OperationRecord) -> None:
        """Insert or replace ``record``; used to seed the store."""

        table = operation_record_table
        with self.session_factory() as session, session.begin():
            session.execute(
                delete(table).where(
                    table.c.namespace == record.key.namespace,
                    table.c.name == record.key.name,
                )
            )
            session.execute(insert(table).values(**record_to_row(record)))
        log.debug("Saved operation %s", record.key)


if TYPE_CHECKING:
    from typing import cast

    from ttlreaper.domain.ports.store import ResourceStore

    _store_check: ResourceStore = SqlAlchemyResourceStore(cast("sessionmaker[Session]", object()))
