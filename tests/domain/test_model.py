from __future__ import annotations

from datetime import datetime

import pytest

from tests.helpers.operations import DEFAULT_KEY, make_operation
from ttlreaper.domain.model import ErrorPolicy, ObjectKey, OperationRecord, TaskState


def test_object_key_round_trips_through_text() -> None:
    key = ObjectKey.parse("kafka/rebalance-1")

    assert key == ObjectKey("kafka", "rebalance-1")
    assert str(key) == "kafka/rebalance-1"


@pytest.mark.parametrize("value", ["no-namespace", "/name", "namespace/"])
def test_object_key_rejects_incomplete_values(value: str) -> None:
    with pytest.raises(ValueError, match="namespace"):
        ObjectKey.parse(value)


@pytest.mark.parametrize("value", ["kafka/rebalance/extra", "kafka/rebalance/"])
def test_object_key_rejects_nested_names(value: str) -> None:
    with pytest.raises(ValueError, match="must not contain"):
        ObjectKey.parse(value)


def test_object_key_rejects_slash_in_parts() -> None:
    with pytest.raises(ValueError, match="must not contain"):
        ObjectKey("kafka/prod", "rebalance-1")


@pytest.mark.parametrize(
    ("state", "policy", "expected"),
    [
        (TaskState.COMPLETED, ErrorPolicy.RETRY, True),
        (TaskState.COMPLETED_WITH_ERROR, ErrorPolicy.IGNORE, True),
        (TaskState.COMPLETED_WITH_ERROR, ErrorPolicy.RETRY, False),
        (TaskState.IN_EXECUTION, ErrorPolicy.IGNORE, False),
        (TaskState.CREATED, ErrorPolicy.RETRY, False),
    ],
)
def test_finished_depends_on_state_and_error_policy(
    state: TaskState,
    policy: ErrorPolicy,
    *,
    expected: bool,
) -> None:
    record = make_operation(state=state, error_policy=policy)

    assert record.finished is expected


def test_deletion_requested_reflects_timestamp() -> None:
    assert make_operation(deleting=True).deletion_requested is True
    assert make_operation().deletion_requested is False


def test_negative_ttl_is_rejected() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        make_operation(ttl=-1)


def test_naive_timestamps_are_rejected() -> None:
    with pytest.raises(ValueError, match="timezone"):
        OperationRecord(
            key=DEFAULT_KEY,
            ttl_seconds_after_finished=60,
            current_task_finished_at=datetime(2025, 1, 1, 12),  # noqa: DTZ001
        )
