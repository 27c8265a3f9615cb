"""Public interface for the remote store adapter."""

from __future__ import annotations

from .client import RestRemoteStore

__all__ = ["RestRemoteStore"]
