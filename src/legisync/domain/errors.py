"""Errors surfaced by the sync engine and its collaborators."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from legisync.domain.sync.resolver import EntityKind


class SyncError(RuntimeError):
    """Base class for every failure raised while reconciling."""


class RemoteError(SyncError):
    """Raised by a remote store for any transport, status or payload failure."""

    def __init__(self, message: str, *, status: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.body = body

    @property
    def is_conflict(self) -> bool:
        return self.status == 409


class NotFoundError(SyncError):
    """No remote entity carries the requested external id."""

    def __init__(self, kind: EntityKind, external_id: str) -> None:
        super().__init__(f"{kind} with external id {external_id!r} not found")
        self.kind = kind
        self.external_id = external_id


class InternalInconsistencyError(SyncError):
    """An invariant of the remote store was violated; not recoverable."""


class JurisdictionNotFoundError(SyncError):
    """The target jurisdiction is missing and creating it was not requested."""


class MissingExternalIdError(SyncError):
    """A stored entity cannot be synced because it has no external metadata."""


class UnsupportedOrderingError(SyncError):
    """Raised by an external source that cannot honour the requested ordering."""


__all__ = [
    "InternalInconsistencyError",
    "JurisdictionNotFoundError",
    "MissingExternalIdError",
    "NotFoundError",
    "RemoteError",
    "SyncError",
    "UnsupportedOrderingError",
]
