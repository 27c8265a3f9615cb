"""Run-scoped cache from external ids to remote store entities."""

from __future__ import annotations

from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING, Literal, overload

from legisync.domain.errors import InternalInconsistencyError, NotFoundError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from legisync.domain.model import (
        Chamber,
        ExternalId,
        Jurisdiction,
        Legislation,
        Member,
        Session,
    )
    from legisync.domain.ports import RemoteStore

log = getLogger(__name__)

type ResolvedEntity = Jurisdiction | Chamber | Session | Member | Legislation


class EntityKind(StrEnum):
    JURISDICTION = "jurisdiction"
    CHAMBER = "chamber"
    SESSION = "session"
    MEMBER = "member"
    LEGISLATION = "legislation"


class IdentityResolver:
    """Resolve external ids against the remote store, memoizing every hit.

    A jurisdiction is held in a single cell since a run targets exactly one;
    every other kind is a map keyed by external id. The resolver only reads:
    reconcilers that create an entity seed it through :meth:`store`.
    """

    def __init__(self, remote: RemoteStore) -> None:
        self._remote = remote
        self._jurisdiction: tuple[ExternalId, Jurisdiction] | None = None
        self._maps: dict[EntityKind, dict[ExternalId, ResolvedEntity]] = {
            kind: {} for kind in EntityKind if kind is not EntityKind.JURISDICTION
        }

    @overload
    def resolve(
        self, kind: Literal[EntityKind.JURISDICTION], external_id: ExternalId
    ) -> Jurisdiction: ...
    @overload
    def resolve(self, kind: Literal[EntityKind.CHAMBER], external_id: ExternalId) -> Chamber: ...
    @overload
    def resolve(self, kind: Literal[EntityKind.SESSION], external_id: ExternalId) -> Session: ...
    @overload
    def resolve(self, kind: Literal[EntityKind.MEMBER], external_id: ExternalId) -> Member: ...
    @overload
    def resolve(
        self, kind: Literal[EntityKind.LEGISLATION], external_id: ExternalId
    ) -> Legislation: ...
    @overload
    def resolve(self, kind: EntityKind, external_id: ExternalId) -> ResolvedEntity: ...
    def resolve(self, kind: EntityKind, external_id: ExternalId) -> ResolvedEntity:
        """Return the cached entity or look it up by external id.

        Raises ``NotFoundError`` when the store has no match and
        ``InternalInconsistencyError`` when it has more than one.
        """

        cached = self._cached(kind, external_id)
        if cached is not None:
            return cached

        matches = self._lookup(kind, external_id)
        if not matches:
            raise NotFoundError(kind, external_id)
        if len(matches) > 1:
            ids = ", ".join(str(match.id) for match in matches)
            raise InternalInconsistencyError(
                f"{len(matches)} {kind} entities share external id {external_id!r} (ids: {ids})"
            )
        log.debug("Resolved %s %r to id %s", kind, external_id, matches[0].id)
        self.store(kind, external_id, matches[0])
        return matches[0]

    def store(self, kind: EntityKind, external_id: ExternalId, value: ResolvedEntity) -> None:
        if kind is EntityKind.JURISDICTION:
            self._jurisdiction = (external_id, value)  # type: ignore[assignment]
            return
        self._maps[kind][external_id] = value

    def jurisdiction(self, external_id: ExternalId) -> Jurisdiction:
        return self.resolve(EntityKind.JURISDICTION, external_id)

    def chamber(self, external_id: ExternalId) -> Chamber:
        return self.resolve(EntityKind.CHAMBER, external_id)

    def session(self, external_id: ExternalId) -> Session:
        return self.resolve(EntityKind.SESSION, external_id)

    def member(self, external_id: ExternalId) -> Member:
        return self.resolve(EntityKind.MEMBER, external_id)

    def legislation(self, external_id: ExternalId) -> Legislation:
        return self.resolve(EntityKind.LEGISLATION, external_id)

    def _cached(self, kind: EntityKind, external_id: ExternalId) -> ResolvedEntity | None:
        if kind is EntityKind.JURISDICTION:
            if self._jurisdiction is not None and self._jurisdiction[0] == external_id:
                return self._jurisdiction[1]
            return None
        return self._maps[kind].get(external_id)

    def _lookup(self, kind: EntityKind, external_id: ExternalId) -> Sequence[ResolvedEntity]:
        remote = self._remote
        if kind is EntityKind.JURISDICTION:
            return remote.list_jurisdictions(external_id=external_id)
        # chambers and sessions are scoped to the run's jurisdiction once it is known
        jurisdiction_id = self._jurisdiction[1].id if self._jurisdiction is not None else None
        if kind is EntityKind.CHAMBER:
            return remote.list_chambers(jurisdiction_id=jurisdiction_id, external_id=external_id)
        if kind is EntityKind.SESSION:
            return remote.list_sessions(jurisdiction_id=jurisdiction_id, external_id=external_id)
        if kind is EntityKind.MEMBER:
            return remote.list_members(external_id=external_id)
        return remote.list_legislation(external_id=external_id).items


__all__ = ["EntityKind", "IdentityResolver", "ResolvedEntity"]
