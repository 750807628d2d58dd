"""Kubernetes API adapter for operation custom resources."""

from __future__ import annotations

from .client import KubernetesResourceStore
from .schema import OperationPayload
from .translator import parse_operation

__all__ = ["KubernetesResourceStore", "OperationPayload", "parse_operation"]
