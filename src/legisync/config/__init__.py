"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_int_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .remote import RemoteStoreConfig, get_remote_store_config
from .sync import SyncConfig, get_sync_config

__all__ = [
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "RemoteStoreConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "SyncConfig",
    "configure_logging",
    "get_remote_store_config",
    "get_sync_config",
    "optional_int_env_var",
    "require_env_var",
    "require_env_vars",
]
