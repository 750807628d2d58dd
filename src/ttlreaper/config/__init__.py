"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import ResilienceConfig, RetryPolicy
from .kubernetes import KubernetesConfig, ResourceType, get_kubernetes_config
from .logging import configure_logging
from .reconciler import ReconcilerConfig, StoreBackend, get_reconciler_config, parse_store_backend
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "KubernetesConfig",
    "MissingConfigurationError",
    "ReconcilerConfig",
    "ResilienceConfig",
    "ResourceType",
    "RetryPolicy",
    "StorageConfig",
    "StoreBackend",
    "configure_logging",
    "get_database_config",
    "get_kubernetes_config",
    "get_reconciler_config",
    "get_storage_config",
    "optional_env_var",
    "parse_store_backend",
    "require_env_vars",
]
