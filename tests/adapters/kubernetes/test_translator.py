from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest
from pydantic import ValidationError

from ttlreaper.adapters.kubernetes import OperationPayload, parse_operation
from ttlreaper.domain.model import ErrorPolicy, ObjectKey, TaskState


def test_parse_operation_reads_ttl_fields(operation_payload: dict[str, Any]) -> None:
    record = parse_operation(operation_payload)

    assert record.key == ObjectKey("kafka", "rebalance-1")
    assert record.uid == "0f4c7b2e-5d1a-4a8e-9b63-2f1c8d7e6a51"
    assert record.task_state is TaskState.COMPLETED
    assert record.error_policy is ErrorPolicy.IGNORE
    assert record.ttl_seconds_after_finished == 300
    assert record.current_task_finished_at == datetime(2025, 1, 1, 11, 55, tzinfo=UTC)
    assert record.deletion_requested is False
    assert record.annotations == {"owner": "ops"}
    assert record.finished is True


def test_parse_operation_accepts_validated_models(operation_payload: dict[str, Any]) -> None:
    model = OperationPayload.model_validate(operation_payload)

    assert parse_operation(model) == parse_operation(operation_payload)


def test_parse_operation_tolerates_missing_status_and_spec() -> None:
    record = parse_operation({"metadata": {"name": "op", "namespace": "kafka"}})

    assert record.ttl_seconds_after_finished is None
    assert record.current_task_finished_at is None
    assert record.task_state is TaskState.CREATED
    assert record.error_policy is ErrorPolicy.RETRY
    assert record.annotations == {}


def test_parse_operation_reads_deletion_timestamp(operation_payload: dict[str, Any]) -> None:
    operation_payload["metadata"]["deletionTimestamp"] = "2025-01-01T12:00:00Z"
    operation_payload["metadata"]["annotations"] = None

    record = parse_operation(operation_payload)

    assert record.deletion_requested_at == datetime(2025, 1, 1, 12, tzinfo=UTC)
    assert record.annotations == {}


def test_parse_operation_maps_unknown_states(operation_payload: dict[str, Any]) -> None:
    operation_payload["status"]["currentTask"]["state"] = "SomethingNew"
    operation_payload["spec"]["errorPolicy"] = "explode"

    record = parse_operation(operation_payload)

    assert record.task_state is TaskState.UNKNOWN
    assert record.error_policy is ErrorPolicy.RETRY
    assert record.finished is False


def test_parse_operation_rejects_negative_ttl(operation_payload: dict[str, Any]) -> None:
    operation_payload["spec"]["ttlSecondsAfterFinished"] = -5

    with pytest.raises(ValidationError):
        parse_operation(operation_payload)
