"""Translate between remote store payloads and domain objects."""

from __future__ import annotations

from typing import TYPE_CHECKING

from legisync.domain.model import (
    Chamber,
    ChamberRef,
    ChamberSession,
    ExternalMetadata,
    Jurisdiction,
    Legislation,
    Member,
    MemberVote,
    Paginated,
    Session,
    VoteDetails,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date, datetime

    from legisync.domain.model import (
        CreateChamberRequest,
        CreateJurisdictionRequest,
        CreateLegislationRequest,
        CreateMemberRequest,
        CreateSessionRequest,
        CreateVoteRequest,
        LinkMemberRequest,
        MemberVoteInput,
        SponsorInput,
        UpdateLegislationRequest,
        UpdateSessionRequest,
        UpdateVoteRequest,
    )

    from .schema import (
        ChamberPayload,
        ChamberRefPayload,
        ChamberSessionPayload,
        ExternalMetadataPayload,
        JurisdictionPayload,
        LegislationPayload,
        MemberPayload,
        PagePayload,
        SessionPayload,
        VotePayload,
    )

type JsonBody = dict[str, object]


# payload -> domain


def to_external_metadata(payload: ExternalMetadataPayload | None) -> ExternalMetadata | None:
    if payload is None:
        return None
    return ExternalMetadata(
        payload.external_id,
        url=payload.url,
        externally_updated_at=payload.externally_updated_at,
    )


def to_chamber_ref(payload: ChamberRefPayload) -> ChamberRef:
    return ChamberRef(
        id=payload.id, name=payload.name, external=to_external_metadata(payload.external)
    )


def to_jurisdiction(payload: JurisdictionPayload) -> Jurisdiction:
    return Jurisdiction(
        id=payload.id,
        name=payload.name,
        external=to_external_metadata(payload.external),
        chambers=tuple(to_chamber_ref(chamber) for chamber in payload.chambers),
    )


def to_chamber(payload: ChamberPayload) -> Chamber:
    return Chamber(
        id=payload.id,
        name=payload.name,
        jurisdiction_id=payload.jurisdiction_id,
        external=to_external_metadata(payload.external),
    )


def to_session(payload: SessionPayload) -> Session:
    return Session(
        id=payload.id,
        name=payload.name,
        jurisdiction_id=payload.jurisdiction_id,
        starts_at=payload.starts_at,
        ends_at=payload.ends_at,
        external=to_external_metadata(payload.external),
        chambers=tuple(to_chamber_ref(chamber) for chamber in payload.chambers),
    )


def to_member(payload: MemberPayload) -> Member:
    return Member(
        id=payload.id,
        display_name=payload.display_name,
        full_name=payload.full_name,
        party=payload.party,
        bio=payload.bio or "",
        photo_url=payload.photo_url,
        external=to_external_metadata(payload.external),
    )


def to_chamber_session(payload: ChamberSessionPayload) -> ChamberSession:
    return ChamberSession(
        session_id=payload.session_id,
        chamber_id=payload.chamber_id,
        members=tuple(to_member(member) for member in payload.members),
    )


def to_legislation(payload: LegislationPayload) -> Legislation:
    return Legislation(
        id=payload.id,
        name_id=payload.name_id,
        title=payload.title,
        legislation_type=payload.legislation_type,
        status_text=payload.status_text,
        session_id=payload.session_id,
        chamber_id=payload.chamber_id,
        status=payload.status,
        status_updated_at=payload.status_updated_at,
        introduced_at=payload.introduced_at,
        external=to_external_metadata(payload.external),
        vote_ids=tuple(payload.vote_ids),
    )


def to_vote_details(payload: VotePayload) -> VoteDetails:
    return VoteDetails(
        id=payload.id,
        name=payload.name,
        occurred_at=payload.occurred_at,
        member_votes=tuple(
            MemberVote(member_id=vote.member_id, choice=vote.vote) for vote in payload.member_votes
        ),
    )


def to_paginated[P, T](payload: PagePayload[P], convert: Callable[[P], T]) -> Paginated[T]:
    return Paginated(
        items=[convert(item) for item in payload.data],
        page=payload.page,
        page_size=payload.page_size,
        num_items=payload.num_items,
        num_pages=payload.num_pages,
    )


# domain -> request body


def _iso(value: date | datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _compact(body: JsonBody) -> JsonBody:
    return {key: value for key, value in body.items() if value is not None}


def external_metadata_body(metadata: ExternalMetadata | None) -> JsonBody | None:
    if metadata is None:
        return None
    return _compact(
        {
            "external_id": metadata.external_id,
            "url": metadata.url,
            "externally_updated_at": _iso(metadata.externally_updated_at),
        }
    )


def jurisdiction_body(request: CreateJurisdictionRequest) -> JsonBody:
    return _compact({"name": request.name, "external": external_metadata_body(request.external)})


def chamber_body(request: CreateChamberRequest) -> JsonBody:
    return _compact({"name": request.name, "external": external_metadata_body(request.external)})


def session_body(request: CreateSessionRequest) -> JsonBody:
    return _compact(
        {
            "name": request.name,
            "starts_at": _iso(request.starts_at),
            "ends_at": _iso(request.ends_at),
            "external": external_metadata_body(request.external),
        }
    )


def session_update_body(request: UpdateSessionRequest) -> JsonBody:
    return _compact(
        {
            "name": request.name,
            "starts_at": _iso(request.starts_at),
            "ends_at": _iso(request.ends_at),
        }
    )


def member_body(request: CreateMemberRequest) -> JsonBody:
    return _compact(
        {
            "display_name": request.display_name,
            "full_name": request.full_name,
            "party": request.party,
            "bio": request.bio,
            "photo_url": request.photo_url,
            "external": external_metadata_body(request.external),
        }
    )


def link_member_body(request: LinkMemberRequest) -> JsonBody:
    return _compact(
        {
            "member_id": request.member_id,
            "appointed_at": _iso(request.appointed_at),
            "vacated_at": _iso(request.vacated_at),
            "district_number": request.district_number,
        }
    )


def legislation_body(request: CreateLegislationRequest) -> JsonBody:
    return _compact(
        {
            "name_id": request.name_id,
            "title": request.title,
            "legislation_type": str(request.legislation_type),
            "status_text": request.status_text,
            "status": str(request.status) if request.status is not None else None,
            "status_updated_at": _iso(request.status_updated_at),
            "introduced_at": _iso(request.introduced_at),
            "summary": request.summary,
            "external": external_metadata_body(request.external),
        }
    )


def legislation_update_body(request: UpdateLegislationRequest) -> JsonBody:
    return _compact(
        {
            "name_id": request.name_id,
            "title": request.title,
            "legislation_type": str(request.legislation_type),
            "status_text": request.status_text,
            "status": str(request.status) if request.status is not None else None,
            "status_updated_at": _iso(request.status_updated_at),
            "introduced_at": _iso(request.introduced_at),
            "external_url": request.url,
            "externally_updated_at": _iso(request.external_updated_at),
        }
    )


def sponsors_body(sponsors: list[SponsorInput]) -> list[JsonBody]:
    return [
        _compact(
            {
                "member_id": sponsor.member_id,
                "sponsor_type": str(sponsor.sponsor_type),
                "sponsored_at": _iso(sponsor.sponsored_at),
            }
        )
        for sponsor in sponsors
    ]


def _member_votes_body(member_votes: tuple[MemberVoteInput, ...]) -> list[JsonBody]:
    return [{"member_id": vote.member_id, "vote": str(vote.choice)} for vote in member_votes]


def vote_body(request: CreateVoteRequest) -> JsonBody:
    return _compact(
        {
            "name": request.name,
            "vote_type": str(request.vote_type),
            "chamber_id": request.chamber_id,
            "occurred_at": _iso(request.occurred_at),
            "member_votes": _member_votes_body(request.member_votes),
            "external": external_metadata_body(request.external),
        }
    )


def vote_update_body(request: UpdateVoteRequest) -> JsonBody:
    return _compact(
        {
            "name": request.name,
            "occurred_at": _iso(request.occurred_at),
            "member_votes": _member_votes_body(request.member_votes),
        }
    )
