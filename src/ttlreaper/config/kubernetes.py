"""Kubernetes API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import ResilienceConfig, RetryPolicy

DEFAULT_RESOURCE_GROUP = "kafka.banzaicloud.io"
DEFAULT_RESOURCE_VERSION = "v1alpha1"
DEFAULT_RESOURCE_PLURAL = "cruisecontroloperations"
KUBERNETES_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class ResourceType:
    """Coordinates of the custom resource collection holding operations."""

    group: str = DEFAULT_RESOURCE_GROUP
    version: str = DEFAULT_RESOURCE_VERSION
    plural: str = DEFAULT_RESOURCE_PLURAL

    def object_path(self, namespace: str, name: str) -> str:
        return f"/apis/{self.group}/{self.version}/namespaces/{namespace}/{self.plural}/{name}"


@dataclass(frozen=True, slots=True)
class KubernetesConfig:
    api_url: str
    resource: ResourceType
    resilience: ResilienceConfig
    token: str | None = None


def get_kubernetes_config(*, resilience: ResilienceConfig | None = None) -> KubernetesConfig:
    values = require_env_vars(("TTLREAPER_KUBE_API_URL",))
    api_url = values["TTLREAPER_KUBE_API_URL"]
    token = optional_env_var("TTLREAPER_KUBE_TOKEN")
    ca_path = optional_env_var("TTLREAPER_KUBE_CA_PATH")

    headers = {"Accept": "application/json"}
    if token is not None:
        headers["Authorization"] = f"Bearer {token}"

    resource = ResourceType(
        group=optional_env_var("TTLREAPER_RESOURCE_GROUP") or DEFAULT_RESOURCE_GROUP,
        version=optional_env_var("TTLREAPER_RESOURCE_VERSION") or DEFAULT_RESOURCE_VERSION,
        plural=optional_env_var("TTLREAPER_RESOURCE_PLURAL") or DEFAULT_RESOURCE_PLURAL,
    )

    return KubernetesConfig(
        api_url=api_url,
        resource=resource,
        token=token,
        resilience=resilience
        or ResilienceConfig(
            name="kubernetes",
            base_url=api_url,
            timeout_seconds=KUBERNETES_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=2),
            default_headers=headers,
            verify=ca_path or True,
        ),
    )
