"""Port for the canonical remote store.

Every operation raises ``RemoteError`` on failure. List operations filtered by
external id are expected to return zero or one match.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from legisync.domain.model import (
        Chamber,
        ChamberSession,
        CreateChamberRequest,
        CreateJurisdictionRequest,
        CreateLegislationRequest,
        CreateMemberRequest,
        CreateSessionRequest,
        CreateVoteRequest,
        ExternalId,
        InternalId,
        Jurisdiction,
        Legislation,
        LinkMemberRequest,
        Member,
        Paginated,
        Session,
        SponsorInput,
        UpdateLegislationRequest,
        UpdateSessionRequest,
        UpdateVoteRequest,
        VoteDetails,
    )


@runtime_checkable
class RemoteStore(Protocol):
    # jurisdictions
    def list_jurisdictions(
        self, *, external_id: ExternalId | None = None
    ) -> list[Jurisdiction]: ...

    def create_jurisdiction(self, request: CreateJurisdictionRequest) -> Jurisdiction: ...

    # chambers
    def list_chambers(
        self,
        *,
        jurisdiction_id: InternalId | None = None,
        external_id: ExternalId | None = None,
    ) -> list[Chamber]: ...

    def create_chamber(
        self, jurisdiction_id: InternalId, request: CreateChamberRequest
    ) -> Chamber: ...

    # sessions
    def list_sessions(
        self,
        *,
        jurisdiction_id: InternalId | None = None,
        external_id: ExternalId | None = None,
    ) -> list[Session]: ...

    def get_session(self, session_id: InternalId) -> Session: ...

    def create_session(
        self, jurisdiction_id: InternalId, request: CreateSessionRequest
    ) -> Session: ...

    def update_session(self, session_id: InternalId, request: UpdateSessionRequest) -> Session: ...

    def delete_session(self, session_id: InternalId) -> None: ...

    def link_chamber_to_session(self, session_id: InternalId, chamber_id: InternalId) -> None:
        """Link a chamber to a session; raises a 409 ``RemoteError`` if already linked."""
        ...

    def get_chamber_session(
        self, session_id: InternalId, chamber_id: InternalId
    ) -> ChamberSession: ...

    # members
    def list_members(self, *, external_id: ExternalId | None = None) -> list[Member]: ...

    def create_member(self, request: CreateMemberRequest) -> Member: ...

    def link_member_to_chamber(
        self,
        session_id: InternalId,
        chamber_id: InternalId,
        request: LinkMemberRequest,
    ) -> None: ...

    # legislation
    def list_legislation(
        self,
        *,
        session_id: InternalId | None = None,
        external_id: ExternalId | None = None,
        page: int = 0,
        page_size: int = 20,
    ) -> Paginated[Legislation]: ...

    def create_legislation(
        self,
        session_id: InternalId,
        chamber_id: InternalId,
        request: CreateLegislationRequest,
    ) -> Legislation: ...

    def update_legislation(
        self, legislation_id: InternalId, request: UpdateLegislationRequest
    ) -> Legislation: ...

    def put_sponsors(
        self, legislation_id: InternalId, sponsors: list[SponsorInput]
    ) -> None: ...

    # votes
    def create_vote(self, legislation_id: InternalId, request: CreateVoteRequest) -> InternalId: ...

    def get_vote(self, legislation_id: InternalId, vote_id: InternalId) -> VoteDetails: ...

    def update_vote(
        self,
        legislation_id: InternalId,
        vote_id: InternalId,
        request: UpdateVoteRequest,
    ) -> VoteDetails: ...


__all__ = ["RemoteStore"]
