"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import ConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable


def _read(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def require_env_vars(names: Iterable[str]) -> dict[str, str]:
    """Return the named variables, or raise naming every one that is missing or blank."""

    values = {name: _read(name) for name in names}
    missing = sorted(name for name, value in values.items() if value is None)
    if missing:
        raise MissingConfigurationError(missing)
    return {name: value for name, value in values.items() if value is not None}


def require_env_var(name: str) -> str:
    return require_env_vars([name])[name]


def optional_int_env_var(name: str, default: int) -> int:
    """Return a positive integer variable, falling back to ``default`` when unset."""

    raw = _read(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value
