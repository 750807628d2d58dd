"""Pydantic models describing the operation custom resource payloads."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field, field_validator


class KubernetesBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ObjectMeta(KubernetesBaseModel):
    name: str
    namespace: str
    uid: str | None = None
    deletion_timestamp: datetime | None = Field(default=None, alias="deletionTimestamp")
    annotations: dict[str, str] = Field(default_factory=dict)

    @field_validator("annotations", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return {} if value is None else value


class OperationSpec(KubernetesBaseModel):
    ttl_seconds_after_finished: int | None = Field(
        default=None,
        alias="ttlSecondsAfterFinished",
        ge=0,
    )
    error_policy: str | None = Field(default=None, alias="errorPolicy")


class CurrentTask(KubernetesBaseModel):
    state: str | None = None
    finished: datetime | None = None


class OperationStatus(KubernetesBaseModel):
    current_task: CurrentTask | None = Field(default=None, alias="currentTask")


class OperationPayload(KubernetesBaseModel):
    metadata: ObjectMeta
    spec: OperationSpec = Field(default_factory=OperationSpec)
    status: OperationStatus = Field(default_factory=OperationStatus)


class StatusPayload(KubernetesBaseModel):
    """``kind: Status`` body the API server returns alongside errors."""

    message: str | None = None
    reason: str | None = None
    code: int | None = None
