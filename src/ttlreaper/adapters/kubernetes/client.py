"""Resource store talking to the Kubernetes API server."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from ttlreaper.adapters.http_resilience import build_client
from ttlreaper.config.kubernetes import KubernetesConfig, get_kubernetes_config
from ttlreaper.domain.model import ObjectKey
from ttlreaper.domain.ports.store import NotFoundError, StoreError

from .schema import StatusPayload
from .translator import parse_operation

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from ttlreaper.domain.model import OperationRecord

log = getLogger(__name__)


def _default_client_factory(config: KubernetesConfig) -> httpx.Client:
    return build_client(config.resilience)


def _error_message(response: httpx.Response) -> str:
    try:
        status = StatusPayload.model_validate(response.json())
    except (ValueError, ValidationError):
        return response.text or response.reason_phrase
    return status.message or status.reason or response.reason_phrase


@dataclass(slots=True)
class KubernetesResourceStore:
    """Get and delete operation custom resources over the REST API."""

    config: KubernetesConfig = field(default_factory=get_kubernetes_config)
    client_factory: Callable[[KubernetesConfig], httpx.Client] = field(
        default=_default_client_factory
    )
    _client: httpx.Client | None = field(default=None, init=False)

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = self.client_factory(self.config)
        return self._client

    def __enter__(self) -> KubernetesResourceStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def get(self, namespace: str, name: str) -> OperationRecord:
        key = ObjectKey(namespace, name)
        response = self._send("GET", key)
        try:
            return parse_operation(response.json())
        except (ValueError, ValidationError) as exc:
            raise StoreError(
                f"Malformed operation payload for {key}",
                key=key,
                operation="get",
                status_code=response.status_code,
            ) from exc

    def delete(self, namespace: str, name: str) -> None:
        key = ObjectKey(namespace, name)
        self._send("DELETE", key)

    def _send(self, method: str, key: ObjectKey) -> httpx.Response:
        operation = method.lower()
        path = self.config.resource.object_path(key.namespace, key.name)
        try:
            response = self.client.request(method, path)
        except httpx.HTTPError as exc:
            raise StoreError(
                f"{method} {path} failed: {exc}", key=key, operation=operation
            ) from exc

        log.debug("%s %s -> %s", method, path, response.status_code)
        if response.status_code == httpx.codes.NOT_FOUND:
            raise NotFoundError(
                f"Operation {key} not found",
                key=key,
                operation=operation,
                status_code=response.status_code,
            )
        if response.is_error:
            raise StoreError(
                f"{method} {path} returned {response.status_code}: {_error_message(response)}",
                key=key,
                operation=operation,
                status_code=response.status_code,
            )
        return response


if TYPE_CHECKING:
    from ttlreaper.domain.ports.store import ResourceStore

    _store_check: ResourceStore = KubernetesResourceStore()
