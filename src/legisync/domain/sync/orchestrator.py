"""Facade composing the reconcilers for one jurisdiction."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from legisync.domain.errors import JurisdictionNotFoundError, MissingExternalIdError, NotFoundError
from legisync.domain.model import LegislationOrder, SponsorInput, external_id_of, needs_update

from .jurisdiction import JurisdictionReconciler
from .legislation import DEFAULT_PAGE_SIZE, LegislationReconciler
from .members import sync_session_members
from .resolver import EntityKind, IdentityResolver
from .results import LegislationSyncResult, LoopStatus
from .sessions import SessionReconciler
from .votes import VoteReconciler

if TYPE_CHECKING:
    from legisync.domain.model import (
        ExternalId,
        ExternalJurisdiction,
        ExternalLegislation,
        InternalId,
        Legislation,
        Paginated,
        Session,
    )
    from legisync.domain.ports import ExternalSource, RemoteStore

    from .results import (
        JurisdictionSyncResult,
        MembersSyncResult,
        SessionsSyncResult,
        VotesSyncResult,
    )

log = getLogger(__name__)

DEFAULT_REMOTE_PAGE_SIZE = 100


class SyncOrchestrator:
    """Sync operations for one jurisdiction, sharing a run-scoped resolver.

    Build instances with :func:`build_sync_orchestrator`; the intended order
    of calls is sessions, then members, then legislation, then votes.
    """

    def __init__(
        self,
        external: ExternalSource,
        remote: RemoteStore,
        resolver: IdentityResolver,
        jurisdiction: ExternalJurisdiction,
        *,
        legislation_page_size: int = DEFAULT_PAGE_SIZE,
        remote_page_size: int = DEFAULT_REMOTE_PAGE_SIZE,
    ) -> None:
        self._external = external
        self._remote = remote
        self._resolver = resolver
        self._jurisdiction = JurisdictionReconciler(jurisdiction, remote, resolver)
        self._sessions = SessionReconciler(self._jurisdiction, external, remote, resolver)
        self._votes = VoteReconciler(external, remote, resolver)
        self.legislation_page_size = legislation_page_size
        self.remote_page_size = remote_page_size

    @property
    def jurisdiction_id(self) -> InternalId:
        return self._jurisdiction.get().id

    def sync_jurisdiction(self) -> JurisdictionSyncResult:
        return self._jurisdiction.sync()

    def sync_sessions(self) -> SessionsSyncResult:
        return self._sessions.sync_sessions()

    def update_members(self, session_id: InternalId) -> MembersSyncResult:
        session, _ = self._session_with_external_id(session_id)
        log.info("Syncing members for session %s (id %s)", session.name, session.id)
        return sync_session_members(session, self._external, self._remote, self._resolver)

    def update_legislation_with_pagination(
        self,
        session_id: InternalId,
        max_pages: int | None = None,
        max_consecutive_known: int | None = None,
    ) -> LegislationSyncResult:
        """Fetch the session's legislation page by page and upsert it.

        ``max_pages`` bounds the last 0-indexed page requested, so a bound of 2
        fetches pages 0, 1 and 2 at most. While the source orders by latest,
        ``max_consecutive_known`` unchanged items in a row mean the rest is
        already in the store: the sync stops there and sets ``stopped_early``.
        """

        session, session_external_id = self._session_with_external_id(session_id)
        log.info("Syncing legislation for session %s (id %s)", session.name, session.id)

        existing = self._existing_legislation(session.id)
        log.info("Found %d existing legislation items", len(existing))

        loop = LegislationReconciler(
            session_external_id, max_page=max_pages, page_size=self.legislation_page_size
        )
        result = LegislationSyncResult()
        consecutive_known = 0
        status = LoopStatus.NEEDS_ANOTHER_LOOP
        while status is LoopStatus.NEEDS_ANOTHER_LOOP and not result.stopped_early:
            status = loop.run_loop(self._external)
            result.pages_fetched += 1
            for item in loop.drain_new_legislation():
                changed = self._upsert_legislation(
                    session, item, existing.get(item.external_id), result
                )
                consecutive_known = 0 if changed else consecutive_known + 1
                if (
                    max_consecutive_known is not None
                    and loop.order_by is LegislationOrder.LATEST
                    and consecutive_known >= max_consecutive_known
                ):
                    log.info("Hit %d consecutive known items, stopping early", consecutive_known)
                    result.stopped_early = True
                    break

        log.info(
            "Legislation sync complete: %d created, %d updated, %d unchanged over %d pages"
            " (stopped early: %s)",
            len(result.created),
            len(result.updated),
            len(result.unchanged),
            result.pages_fetched,
            result.stopped_early,
        )
        return result

    def update_legislation_votes(self, external_legislation_id: ExternalId) -> VotesSyncResult:
        legislation = self._resolver.legislation(external_legislation_id)
        external = self._external.get_legislation(external_legislation_id)
        log.info(
            "Syncing %d votes for legislation %s (id %s)",
            len(external.votes),
            legislation.name_id,
            legislation.id,
        )
        return self._votes.sync(legislation, external.votes)

    def list_legislation(
        self, session_id: InternalId, page: int = 0, page_size: int = DEFAULT_PAGE_SIZE
    ) -> Paginated[Legislation]:
        return self._remote.list_legislation(session_id=session_id, page=page, page_size=page_size)

    def delete_session(self, session_id: InternalId) -> None:
        self._remote.delete_session(session_id)
        log.info("Deleted session %s", session_id)

    def _session_with_external_id(self, session_id: InternalId) -> tuple[Session, ExternalId]:
        session = self._remote.get_session(session_id)
        session_external_id = external_id_of(session)
        if session_external_id is None:
            raise MissingExternalIdError(
                f"Session {session.name} (id {session.id}) has no external id"
            )
        self._resolver.store(EntityKind.SESSION, session_external_id, session)
        return session, session_external_id

    def _existing_legislation(self, session_id: InternalId) -> dict[ExternalId, Legislation]:
        existing: dict[ExternalId, Legislation] = {}
        page = 0
        while True:
            response = self._remote.list_legislation(
                session_id=session_id, page=page, page_size=self.remote_page_size
            )
            for legislation in response.items:
                ext_id = external_id_of(legislation)
                if ext_id is not None:
                    existing[ext_id] = legislation
            if not response.items or response.is_last_page:
                return existing
            page += 1

    def _upsert_legislation(
        self,
        session: Session,
        item: ExternalLegislation,
        current: Legislation | None,
        result: LegislationSyncResult,
    ) -> bool:
        """Create, update or keep one item; return whether the store changed."""

        if current is None:
            chamber = self._resolver.chamber(item.chamber_external_id)
            legislation = self._remote.create_legislation(
                session.id, chamber.id, item.to_create_request()
            )
            log.info(
                "Created legislation %s (id %s, external id %s)",
                legislation.name_id,
                legislation.id,
                item.external_id,
            )
            result.created.append(legislation)
            changed = True
        elif needs_update(item, current):
            legislation = self._remote.update_legislation(current.id, item.to_update_request())
            log.info("Updated legislation %s (id %s)", legislation.name_id, legislation.id)
            result.updated.append(legislation)
            changed = True
        else:
            legislation = current
            result.unchanged.append(legislation)
            changed = False
        self._resolver.store(EntityKind.LEGISLATION, item.external_id, legislation)

        if item.sponsors:
            sponsors = [
                SponsorInput(
                    member_id=self._resolver.member(sponsor.member_external_id).id,
                    sponsor_type=sponsor.sponsor_type,
                    sponsored_at=sponsor.sponsored_at,
                )
                for sponsor in item.sponsors
            ]
            self._remote.put_sponsors(legislation.id, sponsors)
        if current is None and item.votes:
            result.votes.extend(self._votes.sync(legislation, item.votes))
        return changed


def build_sync_orchestrator(
    external: ExternalSource,
    remote: RemoteStore,
    *,
    dangerously_create_jurisdiction: bool = False,
    legislation_page_size: int = DEFAULT_PAGE_SIZE,
    remote_page_size: int = DEFAULT_REMOTE_PAGE_SIZE,
) -> SyncOrchestrator:
    """Resolve the source's jurisdiction and return an orchestrator bound to it.

    A jurisdiction missing from the store is only created, together with its
    chambers, when ``dangerously_create_jurisdiction`` is set; otherwise
    ``JurisdictionNotFoundError`` is raised and nothing is written.
    """

    jurisdiction = external.get_jurisdiction()
    resolver = IdentityResolver(remote)
    orchestrator = SyncOrchestrator(
        external,
        remote,
        resolver,
        jurisdiction,
        legislation_page_size=legislation_page_size,
        remote_page_size=remote_page_size,
    )
    try:
        resolved = resolver.jurisdiction(jurisdiction.external_id)
    except NotFoundError as exc:
        if not dangerously_create_jurisdiction:
            raise JurisdictionNotFoundError(
                f"Jurisdiction {jurisdiction.name} ({jurisdiction.external_id}) does not exist; "
                "pass dangerously_create_jurisdiction=True to create it"
            ) from exc
        created = orchestrator.sync_jurisdiction()
        log.warning(
            "Created jurisdiction %s (id %s) with %d chambers",
            created.jurisdiction_name,
            created.jurisdiction_id,
            len(created.chambers_created),
        )
    else:
        log.info("Using jurisdiction %s (id %s)", resolved.name, resolved.id)
    return orchestrator


__all__ = ["DEFAULT_REMOTE_PAGE_SIZE", "SyncOrchestrator", "build_sync_orchestrator"]
