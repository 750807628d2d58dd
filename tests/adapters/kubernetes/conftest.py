from __future__ import annotations

from typing import Any

import httpx
import pytest

from tests.helpers.kubernetes import Handler, StoreFactory, make_config
from ttlreaper.adapters.http_resilience import build_client
from ttlreaper.adapters.kubernetes import KubernetesResourceStore
from ttlreaper.config.http_resilience import RetryPolicy
from ttlreaper.config.kubernetes import KubernetesConfig


@pytest.fixture
def make_store() -> StoreFactory:
    def factory(handler: Handler, *, retry: RetryPolicy | None = None) -> KubernetesResourceStore:
        def client_factory(config: KubernetesConfig) -> httpx.Client:
            return build_client(config.resilience, transport=httpx.MockTransport(handler))

        return KubernetesResourceStore(config=make_config(retry), client_factory=client_factory)

    return factory


@pytest.fixture
def operation_payload() -> dict[str, Any]:
    return {
        "apiVersion": "kafka.banzaicloud.io/v1alpha1",
        "kind": "CruiseControlOperation",
        "metadata": {
            "name": "rebalance-1",
            "namespace": "kafka",
            "uid": "0f4c7b2e-5d1a-4a8e-9b63-2f1c8d7e6a51",
            "annotations": {"owner": "ops"},
        },
        "spec": {"ttlSecondsAfterFinished": 300, "errorPolicy": "ignore"},
        "status": {
            "currentTask": {
                "id": "task-1",
                "operation": "rebalance",
                "state": "Completed",
                "started": "2025-01-01T11:50:00Z",
                "finished": "2025-01-01T11:55:00Z",
            },
            "retryCount": 0,
        },
    }
