"""Ensure legislative sessions exist and are linked to every chamber."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from legisync.domain.errors import RemoteError
from legisync.domain.model import external_id_of

from .resolver import EntityKind
from .results import SessionsSyncResult

if TYPE_CHECKING:
    from legisync.domain.model import Chamber, Session
    from legisync.domain.ports import ExternalSource, RemoteStore

    from .jurisdiction import JurisdictionReconciler
    from .resolver import IdentityResolver

log = getLogger(__name__)


class SessionReconciler:
    def __init__(
        self,
        jurisdiction: JurisdictionReconciler,
        external: ExternalSource,
        remote: RemoteStore,
        resolver: IdentityResolver,
    ) -> None:
        self._jurisdiction = jurisdiction
        self._external = external
        self._remote = remote
        self._resolver = resolver

    def sync_sessions(self) -> SessionsSyncResult:
        """Create or update every session the source lists.

        Sessions matched by external id are updated in place. New sessions are
        linked to every chamber of the jurisdiction before the next session is
        touched. A link failure other than "already linked" deletes the new
        session again and aborts the call.
        """

        jurisdiction = self._jurisdiction.get()
        existing = {
            ext_id: session
            for session in self._remote.list_sessions(jurisdiction_id=jurisdiction.id)
            if (ext_id := external_id_of(session)) is not None
        }
        chambers = self._remote.list_chambers(jurisdiction_id=jurisdiction.id)

        result = SessionsSyncResult()
        for external_session in self._external.list_sessions():
            current = existing.get(external_session.external_id)
            if current is not None:
                session = self._remote.update_session(
                    current.id, external_session.to_update_request()
                )
                result.updated.append(session)
            else:
                session = self._remote.create_session(
                    jurisdiction.id, external_session.to_create_request()
                )
                log.info("Created session %s (id %s)", session.name, session.id)
                self._link_all_chambers(session, chambers)
                result.created.append(session)
                # repeated entries in the source list update instead of re-creating
                existing[external_session.external_id] = session
            self._resolver.store(EntityKind.SESSION, external_session.external_id, session)

        return result

    def _link_all_chambers(self, session: Session, chambers: list[Chamber]) -> None:
        for chamber in chambers:
            try:
                self._remote.link_chamber_to_session(session.id, chamber.id)
            except RemoteError as exc:
                if not exc.is_conflict:
                    self._discard_partially_linked(session, chamber, exc)
                    raise
                log.debug("Chamber %s already linked to session %s", chamber.id, session.id)
                continue
            log.info("Linked chamber %s to session %s", chamber.name, session.name)

    def _discard_partially_linked(
        self, session: Session, chamber: Chamber, exc: RemoteError
    ) -> None:
        log.error(
            "Linking chamber %s to session %s failed (%s); deleting the session",
            chamber.name,
            session.name,
            exc,
        )
        self._remote.delete_session(session.id)
