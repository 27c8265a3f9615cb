"""Upsert the recorded votes of one piece of legislation."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING

from legisync.domain.errors import NotFoundError, RemoteError
from legisync.domain.model import (
    CreateVoteRequest,
    ExternalMetadata,
    MemberAction,
    MemberVoteInput,
    UpdateVoteRequest,
    VoteExistsAction,
)

from .resolver import EntityKind
from .results import VotesSyncResult

if TYPE_CHECKING:
    from collections.abc import Iterable

    from legisync.domain.model import (
        ExternalId,
        ExternalLegislationVote,
        ExternalSourceConfig,
        InternalId,
        Legislation,
        Member,
        VoteDetails,
    )
    from legisync.domain.ports import ExternalSource, RemoteStore

    from .resolver import IdentityResolver

log = getLogger(__name__)


class VoteReconciler:
    def __init__(
        self,
        external: ExternalSource,
        remote: RemoteStore,
        resolver: IdentityResolver,
        *,
        config: ExternalSourceConfig | None = None,
    ) -> None:
        self._external = external
        self._remote = remote
        self._resolver = resolver
        self._config = config or external.config()

    def sync(
        self, legislation: Legislation, votes: Iterable[ExternalLegislationVote]
    ) -> VotesSyncResult:
        """Create each vote; turn "already exists" into an update when allowed.

        Voting members are resolved by external id according to
        ``member_missing``. A 409 from the store whose body names the existing
        vote id is compared and, if different, updated when ``vote_exists`` is
        ``UPDATE``; in every other case the store's error propagates.
        """

        result = VotesSyncResult()
        for vote in votes:
            member_votes = self._member_votes(vote)
            request = CreateVoteRequest(
                name=vote.name,
                vote_type=vote.vote_type,
                chamber_id=self._chamber_id(vote),
                occurred_at=vote.occurred_at,
                member_votes=member_votes,
                external=ExternalMetadata(vote.external_id, url=vote.url),
            )
            try:
                vote_id = self._remote.create_vote(legislation.id, request)
            except RemoteError as exc:
                existing_id = self._existing_vote_id(exc)
                if existing_id is None:
                    raise
                log.info("Vote %r already exists as %s", vote.name, existing_id)
                self._reconcile_existing(legislation.id, existing_id, request, result)
                continue
            log.info(
                "Created vote %r (id %s, external id %s)", vote.name, vote_id, vote.external_id
            )
            result.created.append(vote_id)

        log.info(
            "Votes for legislation %s: %d created, %d updated, %d unchanged",
            legislation.name_id,
            len(result.created),
            len(result.updated),
            len(result.unchanged),
        )
        return result

    def _member_votes(self, vote: ExternalLegislationVote) -> tuple[MemberVoteInput, ...]:
        resolved: list[MemberVoteInput] = []
        for member_vote in vote.member_votes:
            member = self._member(member_vote.member_external_id)
            if member is None:
                log.warning(
                    "Skipping vote of unknown member %s on %r",
                    member_vote.member_external_id,
                    vote.name,
                )
                continue
            resolved.append(MemberVoteInput(member_id=member.id, choice=member_vote.choice))
        return tuple(resolved)

    def _member(self, external_id: ExternalId) -> Member | None:
        try:
            return self._resolver.member(external_id)
        except NotFoundError:
            action = self._config.member_missing
            if action is MemberAction.SKIP:
                return None
            if action is MemberAction.FAIL:
                raise
        external_member = self._external.get_member(external_id)
        member = self._remote.create_member(external_member.to_create_request())
        self._resolver.store(EntityKind.MEMBER, external_id, member)
        log.info("Created member %s (id %s) while syncing votes", member.display_name, member.id)
        return member

    def _chamber_id(self, vote: ExternalLegislationVote) -> InternalId | None:
        if vote.chamber_external_id is None:
            return None
        return self._resolver.chamber(vote.chamber_external_id).id

    def _existing_vote_id(self, exc: RemoteError) -> InternalId | None:
        if not exc.is_conflict or self._config.vote_exists is not VoteExistsAction.UPDATE:
            return None
        try:
            payload = json.loads(exc.body)
            return int(payload["description"])
        except (ValueError, TypeError, KeyError):
            return None

    def _reconcile_existing(
        self,
        legislation_id: InternalId,
        vote_id: InternalId,
        request: CreateVoteRequest,
        result: VotesSyncResult,
    ) -> None:
        current = self._remote.get_vote(legislation_id, vote_id)
        if not _vote_differs(current, request):
            result.unchanged.append(vote_id)
            return
        self._remote.update_vote(
            legislation_id,
            vote_id,
            UpdateVoteRequest(
                name=request.name,
                occurred_at=request.occurred_at,
                member_votes=request.member_votes,
            ),
        )
        log.info("Updated vote %r (id %s)", request.name, vote_id)
        result.updated.append(vote_id)


def _vote_differs(current: VoteDetails, request: CreateVoteRequest) -> bool:
    return (
        current.name != request.name
        or current.occurred_at != request.occurred_at
        or len(current.member_votes) != len(request.member_votes)
    )


__all__ = ["VoteReconciler"]
