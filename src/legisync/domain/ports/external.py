"""Port for pluggable external data sources."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from legisync.domain.model import (
        ExternalChamberMember,
        ExternalId,
        ExternalJurisdiction,
        ExternalLegislation,
        ExternalMember,
        ExternalSession,
        ExternalSourceConfig,
        LegislationQuery,
        Paginated,
    )


@runtime_checkable
class ExternalSource(Protocol):
    """Fetcher for everything one jurisdiction's source knows about.

    Implementations never filter: they return all available records and leave
    the create/update decision to the sync engine.
    """

    def config(self) -> ExternalSourceConfig: ...

    def get_jurisdiction(self) -> ExternalJurisdiction: ...

    def list_sessions(self) -> list[ExternalSession]: ...

    def list_members(
        self,
        session_external_id: ExternalId,
        chamber_external_id: ExternalId,
    ) -> list[ExternalChamberMember]: ...

    def fetch_legislation(self, query: LegislationQuery) -> Paginated[ExternalLegislation]:
        """Return one 0-indexed page of a session's legislation.

        With ``LegislationOrder.LATEST`` the page must be ordered most recently
        updated first; sources that cannot do that raise
        ``UnsupportedOrderingError``.
        """
        ...

    def get_legislation(self, external_id: ExternalId) -> ExternalLegislation: ...

    def get_member(self, external_id: ExternalId) -> ExternalMember: ...


__all__ = ["ExternalSource"]
