"""SQLAlchemy table metadata for operation records."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Dialect,
    Enum,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    TypeDecorator,
)

from ttlreaper.domain.model import ErrorPolicy, ObjectKey, OperationRecord, TaskState

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy.engine import Engine, RowMapping

log = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

operation_record_table = Table(
    "operation_record",
    metadata,
    Column("namespace", String, nullable=False),
    Column("name", String, nullable=False),
    Column("uid", String, nullable=True),
    Column(
        "task_state",
        Enum(TaskState, values_callable=lambda enum: [member.value for member in enum]),
        nullable=False,
        default=TaskState.CREATED,
    ),
    Column(
        "error_policy",
        Enum(ErrorPolicy, values_callable=lambda enum: [member.value for member in enum]),
        nullable=False,
        default=ErrorPolicy.RETRY,
    ),
    Column("ttl_seconds_after_finished", Integer, nullable=True),
    Column("current_task_finished_at", UTCDateTime, nullable=True),
    Column("deletion_requested_at", UTCDateTime, nullable=True),
    Column("annotations", JSON, nullable=False, default=dict),
    PrimaryKeyConstraint("namespace", "name"),
)


def record_to_row(record: OperationRecord) -> dict[str, Any]:
    return {
        "namespace": record.key.namespace,
        "name": record.key.name,
        "uid": record.uid,
        "task_state": record.task_state,
        "error_policy": record.error_policy,
        "ttl_seconds_after_finished": record.ttl_seconds_after_finished,
        "current_task_finished_at": record.current_task_finished_at,
        "deletion_requested_at": record.deletion_requested_at,
        "annotations": dict(record.annotations),
    }


def row_to_record(row: RowMapping | Mapping[str, Any]) -> OperationRecord:
    annotations = row["annotations"] or {}
    return OperationRecord(
        key=ObjectKey(namespace=row["namespace"], name=row["name"]),
        uid=row["uid"],
        task_state=TaskState(row["task_state"]),
        error_policy=ErrorPolicy(row["error_policy"]),
        ttl_seconds_after_finished=row["ttl_seconds_after_finished"],
        current_task_finished_at=row["current_task_finished_at"],
        deletion_requested_at=row["deletion_requested_at"],
        annotations={str(key): str(value) for key, value in annotations.items()},
    )


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    metadata.create_all(engine)
