"""Capability interfaces for the sync engine's collaborators."""

from __future__ import annotations

from .external import ExternalSource
from .remote import RemoteStore

__all__ = ["ExternalSource", "RemoteStore"]
