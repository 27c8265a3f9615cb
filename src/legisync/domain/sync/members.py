"""Ensure a chamber-session's members exist and are linked."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from legisync.domain.errors import MissingExternalIdError, NotFoundError
from legisync.domain.model import LinkMemberRequest, external_id_of

from .resolver import EntityKind
from .results import MembersSyncResult

if TYPE_CHECKING:
    from legisync.domain.model import ExternalChamberMember, ExternalId, Member, Session
    from legisync.domain.ports import ExternalSource, RemoteStore

    from .resolver import IdentityResolver

log = getLogger(__name__)


class MemberReconciler:
    """Members of one chamber for one session, both given by external id."""

    def __init__(
        self,
        session_external_id: ExternalId,
        chamber_external_id: ExternalId,
        external: ExternalSource,
        remote: RemoteStore,
        resolver: IdentityResolver,
    ) -> None:
        self.session_external_id = session_external_id
        self.chamber_external_id = chamber_external_id
        self._external = external
        self._remote = remote
        self._resolver = resolver

    def sync(self) -> MembersSyncResult:
        """Partition fetched members into new and already-linked ones.

        Members already linked to the chamber-session are duplicates and are
        left untouched. Every other member is resolved globally, created when
        the store has never seen it, and linked with its seat details.
        """

        session = self._resolver.session(self.session_external_id)
        chamber = self._resolver.chamber(self.chamber_external_id)
        linked = {
            ext_id
            for member in self._remote.get_chamber_session(session.id, chamber.id).members
            if (ext_id := external_id_of(member)) is not None
        }

        result = MembersSyncResult()
        fetched = self._external.list_members(self.session_external_id, self.chamber_external_id)
        for seat in fetched:
            if seat.member.external_id in linked:
                result.duplicates.append(seat)
                continue

            member = self._get_or_create(seat)
            self._remote.link_member_to_chamber(
                session.id,
                chamber.id,
                LinkMemberRequest(
                    member_id=member.id,
                    appointed_at=seat.appointed_at,
                    vacated_at=seat.vacated_at,
                    district_number=seat.district_number,
                ),
            )
            linked.add(seat.member.external_id)
            result.maybe_new.append(seat)

        log.info(
            "Members for chamber %s in session %s: %d new, %d already linked",
            chamber.name,
            session.name,
            len(result.maybe_new),
            len(result.duplicates),
        )
        return result

    def _get_or_create(self, seat: ExternalChamberMember) -> Member:
        try:
            return self._resolver.member(seat.member.external_id)
        except NotFoundError:
            member = self._remote.create_member(seat.member.to_create_request())
            self._resolver.store(EntityKind.MEMBER, seat.member.external_id, member)
            log.info("Created member %s (id %s)", member.display_name, member.id)
            return member


def sync_session_members(
    session: Session,
    external: ExternalSource,
    remote: RemoteStore,
    resolver: IdentityResolver,
) -> MembersSyncResult:
    """Run :class:`MemberReconciler` for every chamber linked to ``session``.

    Chambers the source does not know about are skipped; any other error
    propagates.
    """

    session_external_id = external_id_of(session)
    if session_external_id is None:
        raise MissingExternalIdError(f"Session {session.id} has no external id")

    result = MembersSyncResult()
    for chamber in session.chambers:
        chamber_external_id = external_id_of(chamber)
        if chamber_external_id is None:
            log.warning("Skipping chamber %s: no external id", chamber.name)
            continue
        reconciler = MemberReconciler(
            session_external_id, chamber_external_id, external, remote, resolver
        )
        try:
            result.extend(reconciler.sync())
        except NotFoundError as exc:
            log.warning("Skipping chamber %s: %s", chamber.name, exc)
    return result
