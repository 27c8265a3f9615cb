"""Ensure the target jurisdiction and its chambers exist."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from legisync.domain.errors import NotFoundError
from legisync.domain.model import external_id_of

from .resolver import EntityKind
from .results import JurisdictionSyncResult

if TYPE_CHECKING:
    from legisync.domain.model import ExternalJurisdiction, Jurisdiction
    from legisync.domain.ports import RemoteStore

    from .resolver import IdentityResolver

log = getLogger(__name__)


class JurisdictionReconciler:
    def __init__(
        self,
        external: ExternalJurisdiction,
        remote: RemoteStore,
        resolver: IdentityResolver,
    ) -> None:
        self._external = external
        self._remote = remote
        self._resolver = resolver

    def get(self) -> Jurisdiction:
        return self._resolver.jurisdiction(self._external.external_id)

    def sync(self) -> JurisdictionSyncResult:
        """Create the jurisdiction and any of its chambers the store lacks.

        Chambers already present (matched by external id) are reported as
        updated; nothing is written for them. Re-running against unchanged
        source data only re-reads.
        """

        created = False
        try:
            jurisdiction = self.get()
        except NotFoundError:
            jurisdiction = self._remote.create_jurisdiction(self._external.to_create_request())
            self._resolver.store(EntityKind.JURISDICTION, self._external.external_id, jurisdiction)
            created = True
            log.info("Created jurisdiction %s (id %s)", jurisdiction.name, jurisdiction.id)

        result = JurisdictionSyncResult(
            jurisdiction_id=jurisdiction.id,
            jurisdiction_name=jurisdiction.name,
            jurisdiction_created=created,
        )

        existing = {
            ext_id: chamber
            for chamber in self._remote.list_chambers(jurisdiction_id=jurisdiction.id)
            if (ext_id := external_id_of(chamber)) is not None
        }
        for external_chamber in self._external.chambers:
            chamber = existing.get(external_chamber.external_id)
            if chamber is not None:
                result.chambers_updated.append(chamber)
            else:
                chamber = self._remote.create_chamber(
                    jurisdiction.id, external_chamber.to_create_request()
                )
                log.info("Created chamber %s (id %s)", chamber.name, chamber.id)
                result.chambers_created.append(chamber)
            self._resolver.store(EntityKind.CHAMBER, external_chamber.external_id, chamber)

        return result
