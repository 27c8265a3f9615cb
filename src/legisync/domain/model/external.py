"""Records supplied by an external source.

External sources are pure fetchers: they return everything they know, and the
sync engine decides what to create or update. The conversion helpers here are
the only place where an external record is mapped onto a store request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .entities import ExternalMetadata
from .enums import LegislationOrder, LegislationType, MemberAction, VoteExistsAction, VoteType
from .requests import (
    CreateChamberRequest,
    CreateJurisdictionRequest,
    CreateLegislationRequest,
    CreateMemberRequest,
    CreateSessionRequest,
    UpdateLegislationRequest,
    UpdateSessionRequest,
)

if TYPE_CHECKING:
    from datetime import date, datetime

    from .entities import ExternalId, Legislation
    from .enums import LegislationStatus, SponsorshipType, VoteChoice


@dataclass(frozen=True, slots=True)
class ExternalSourceConfig:
    """Tells the sync engine how an external source behaves."""

    member_missing: MemberAction = MemberAction.FAIL
    # only safe when the source's vote ids are unique
    vote_exists: VoteExistsAction = VoteExistsAction.FAIL


@dataclass(frozen=True, slots=True, kw_only=True)
class ExternalChamber:
    name: str
    external_id: ExternalId
    url: str | None = None

    def to_create_request(self) -> CreateChamberRequest:
        return CreateChamberRequest(
            name=self.name,
            external=ExternalMetadata(self.external_id, url=self.url),
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class ExternalJurisdiction:
    name: str
    external_id: ExternalId
    url: str | None = None
    chambers: tuple[ExternalChamber, ...] = ()

    def to_create_request(self) -> CreateJurisdictionRequest:
        return CreateJurisdictionRequest(
            name=self.name,
            external=ExternalMetadata(self.external_id, url=self.url),
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class ExternalSession:
    name: str
    external_id: ExternalId
    url: str | None = None
    starts_at: date | None = None
    ends_at: date | None = None

    def to_create_request(self) -> CreateSessionRequest:
        return CreateSessionRequest(
            name=self.name,
            starts_at=self.starts_at,
            ends_at=self.ends_at,
            external=ExternalMetadata(self.external_id, url=self.url),
        )

    def to_update_request(self) -> UpdateSessionRequest:
        return UpdateSessionRequest(name=self.name, starts_at=self.starts_at, ends_at=self.ends_at)


@dataclass(frozen=True, slots=True, kw_only=True)
class ExternalMember:
    external_id: ExternalId
    display_name: str
    full_name: str | None = None
    bio: str = ""
    party: str | None = None
    photo_url: str | None = None
    url: str | None = None

    def to_create_request(self) -> CreateMemberRequest:
        return CreateMemberRequest(
            display_name=self.display_name,
            bio=self.bio,
            party=self.party,
            full_name=self.full_name,
            photo_url=self.photo_url,
            external=ExternalMetadata(self.external_id, url=self.url),
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class ExternalChamberMember:
    """A member's seat in one chamber for one session."""

    member: ExternalMember
    appointed_at: date | None = None
    vacated_at: date | None = None
    district_number: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ExternalSponsor:
    member_external_id: ExternalId
    sponsor_type: SponsorshipType
    sponsored_at: datetime | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ExternalMemberVote:
    member_external_id: ExternalId
    choice: VoteChoice


@dataclass(frozen=True, slots=True, kw_only=True)
class ExternalLegislationVote:
    """A recorded vote on a piece of legislation.

    Most sources do not give votes their own identifier; ``external_id`` is then
    expected to be a composite of the legislation id and the source's vote key.
    """

    external_id: ExternalId
    name: str
    vote_type: VoteType = VoteType.UNKNOWN
    chamber_external_id: ExternalId | None = None
    url: str | None = None
    occurred_at: datetime | None = None
    member_votes: tuple[ExternalMemberVote, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class ExternalLegislation:
    external_id: ExternalId
    name_id: str
    title: str
    chamber_external_id: ExternalId
    # when the source material last changed; sources without one pass "now"
    external_updated_at: datetime
    legislation_type: LegislationType = LegislationType.BILL
    status: LegislationStatus | None = None
    status_text: str = ""
    status_updated_at: datetime | None = None
    url: str | None = None
    introduced_at: datetime | None = None
    summary: str | None = None
    sponsors: tuple[ExternalSponsor, ...] = ()
    votes: tuple[ExternalLegislationVote, ...] = ()

    def to_create_request(self) -> CreateLegislationRequest:
        return CreateLegislationRequest(
            name_id=self.name_id,
            title=self.title,
            legislation_type=self.legislation_type,
            status_text=self.status_text,
            status=self.status,
            status_updated_at=self.status_updated_at or self.external_updated_at,
            introduced_at=self.introduced_at,
            summary=self.summary,
            external=ExternalMetadata(
                self.external_id,
                url=self.url,
                externally_updated_at=self.external_updated_at,
            ),
        )

    def to_update_request(self) -> UpdateLegislationRequest:
        return UpdateLegislationRequest(
            name_id=self.name_id,
            title=self.title,
            legislation_type=self.legislation_type,
            status_text=self.status_text,
            status=self.status,
            status_updated_at=self.status_updated_at,
            introduced_at=self.introduced_at,
            url=self.url,
            external_updated_at=self.external_updated_at,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class LegislationQuery:
    session_external_id: ExternalId
    order_by: LegislationOrder = LegislationOrder.LATEST
    page: int = 0
    page_size: int = 20


def needs_update(external: ExternalLegislation, current: Legislation) -> bool:
    """Return whether ``current`` is stale compared to the freshly fetched record.

    Tracked fields: title, status, status text, status-updated time, external URL
    and legislation type. A record without a status-updated time does not count
    as a change on that field. A view carrying another external id, or none at
    all, is never reported as stale.
    """

    if current.external is None or current.external.external_id != external.external_id:
        return False
    return (
        external.title != current.title
        or external.status != current.status
        or external.status_text != current.status_text
        or (
            external.status_updated_at is not None
            and external.status_updated_at != current.status_updated_at
        )
        or external.url != current.external.url
        or external.legislation_type != current.legislation_type
    )


__all__ = [
    "ExternalChamber",
    "ExternalChamberMember",
    "ExternalJurisdiction",
    "ExternalLegislation",
    "ExternalLegislationVote",
    "ExternalMember",
    "ExternalMemberVote",
    "ExternalSession",
    "ExternalSourceConfig",
    "ExternalSponsor",
    "LegislationQuery",
    "needs_update",
]
