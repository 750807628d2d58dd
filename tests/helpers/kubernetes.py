from __future__ import annotations

from collections.abc import Callable

import httpx

from ttlreaper.adapters.kubernetes import KubernetesResourceStore
from ttlreaper.config.http_resilience import ResilienceConfig, RetryPolicy
from ttlreaper.config.kubernetes import KubernetesConfig, ResourceType

API_URL = "https://kube.test"
OBJECT_PATH = (
    "/apis/kafka.banzaicloud.io/v1alpha1/namespaces/kafka/cruisecontroloperations/rebalance-1"
)

type Handler = Callable[[httpx.Request], httpx.Response]
type StoreFactory = Callable[..., KubernetesResourceStore]


def make_config(retry: RetryPolicy | None = None) -> KubernetesConfig:
    return KubernetesConfig(
        api_url=API_URL,
        resource=ResourceType(),
        resilience=ResilienceConfig(
            name="kubernetes-test",
            base_url=API_URL,
            retry=retry or RetryPolicy(total=0),
            default_headers={"Authorization": "Bearer test-token"},
        ),
        token="test-token",
    )


def status_response(code: int, message: str) -> httpx.Response:
    return httpx.Response(
        code,
        json={"kind": "Status", "status": "Failure", "message": message, "code": code},
    )
