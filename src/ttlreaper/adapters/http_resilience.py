"""Synchronous httpx clients with transport-level retries."""

from __future__ import annotations

import ssl
from typing import TYPE_CHECKING, TypedDict

import httpx
from httpx_retries import Retry, RetryTransport

from ttlreaper.config.http_resilience import ResilienceConfig, RetryPolicy

if TYPE_CHECKING:
    from httpx._types import HeaderTypes, TimeoutTypes


class ClientOptions(TypedDict, total=False):
    base_url: str
    timeout: TimeoutTypes
    headers: HeaderTypes
    transport: httpx.BaseTransport


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=tuple(policy.allowed_methods),
        status_forcelist=tuple(policy.status_forcelist),
        retry_on_exceptions=policy.retry_on_exceptions,
        backoff_jitter=policy.backoff_jitter,
    )


def _ssl_context(verify: str | bool) -> ssl.SSLContext | bool:
    if isinstance(verify, str):
        return ssl.create_default_context(cafile=verify)
    return verify


def build_client(
    config: ResilienceConfig,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Return a synchronous ``httpx.Client`` retrying transient transport failures.

    ``transport`` replaces the network transport underneath the retry layer, which
    is how tests plug in ``httpx.MockTransport``.
    """

    inner = transport or httpx.HTTPTransport(verify=_ssl_context(config.verify))
    options: ClientOptions = {
        "timeout": config.timeout_seconds,
        "transport": RetryTransport(transport=inner, retry=build_retry(config.retry)),
    }
    if config.base_url is not None:
        options["base_url"] = config.base_url
    if config.default_headers:
        options["headers"] = dict(config.default_headers)
    return httpx.Client(**options)


__all__ = ["ResilienceConfig", "RetryPolicy", "build_client", "build_retry"]
