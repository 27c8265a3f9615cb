"""Payloads sent to the remote store for create/update operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date, datetime

    from .entities import ExternalMetadata, InternalId
    from .enums import (
        LegislationStatus,
        LegislationType,
        SponsorshipType,
        VoteChoice,
        VoteType,
    )


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateJurisdictionRequest:
    name: str
    external: ExternalMetadata | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateChamberRequest:
    name: str
    external: ExternalMetadata | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateSessionRequest:
    name: str
    starts_at: date | None = None
    ends_at: date | None = None
    external: ExternalMetadata | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateSessionRequest:
    name: str | None = None
    starts_at: date | None = None
    ends_at: date | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateMemberRequest:
    display_name: str
    bio: str = ""
    party: str | None = None
    full_name: str | None = None
    photo_url: str | None = None
    external: ExternalMetadata | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class LinkMemberRequest:
    member_id: InternalId
    appointed_at: date | None = None
    vacated_at: date | None = None
    district_number: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateLegislationRequest:
    name_id: str
    title: str
    legislation_type: LegislationType
    status_text: str
    status: LegislationStatus | None = None
    status_updated_at: datetime | None = None
    introduced_at: datetime | None = None
    summary: str | None = None
    external: ExternalMetadata | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateLegislationRequest:
    name_id: str
    title: str
    legislation_type: LegislationType
    status_text: str
    status: LegislationStatus | None = None
    status_updated_at: datetime | None = None
    introduced_at: datetime | None = None
    url: str | None = None
    external_updated_at: datetime | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class SponsorInput:
    member_id: InternalId
    sponsor_type: SponsorshipType
    sponsored_at: datetime | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class MemberVoteInput:
    member_id: InternalId
    choice: VoteChoice


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateVoteRequest:
    name: str
    vote_type: VoteType
    chamber_id: InternalId | None = None
    occurred_at: datetime | None = None
    member_votes: tuple[MemberVoteInput, ...] = field(default_factory=tuple)
    external: ExternalMetadata | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateVoteRequest:
    name: str
    occurred_at: datetime | None = None
    member_votes: tuple[MemberVoteInput, ...] = field(default_factory=tuple)
