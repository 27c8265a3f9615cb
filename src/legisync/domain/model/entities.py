"""Views of entities held by the canonical remote store.

Every view carries the integer id assigned by the store. Views are immutable
snapshots; the engine never edits them in place, it asks the store for a new
one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date, datetime

    from .enums import LegislationStatus, LegislationType, VoteChoice

type ExternalId = str
type InternalId = int


@dataclass(frozen=True, slots=True)
class ExternalMetadata:
    """Link between a stored entity and the record it came from."""

    external_id: ExternalId
    url: str | None = None
    externally_updated_at: datetime | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ChamberRef:
    id: InternalId
    name: str
    external: ExternalMetadata | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Jurisdiction:
    id: InternalId
    name: str
    external: ExternalMetadata | None = None
    chambers: tuple[ChamberRef, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class Chamber:
    id: InternalId
    name: str
    jurisdiction_id: InternalId
    external: ExternalMetadata | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Session:
    id: InternalId
    name: str
    jurisdiction_id: InternalId
    starts_at: date | None = None
    ends_at: date | None = None
    external: ExternalMetadata | None = None
    chambers: tuple[ChamberRef, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class Member:
    id: InternalId
    display_name: str
    full_name: str | None = None
    party: str | None = None
    bio: str = ""
    photo_url: str | None = None
    external: ExternalMetadata | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ChamberSession:
    """Members linked to one chamber for one session."""

    session_id: InternalId
    chamber_id: InternalId
    members: tuple[Member, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class Legislation:
    id: InternalId
    name_id: str
    title: str
    legislation_type: LegislationType
    status_text: str
    session_id: InternalId
    chamber_id: InternalId
    status: LegislationStatus | None = None
    status_updated_at: datetime | None = None
    introduced_at: datetime | None = None
    external: ExternalMetadata | None = None
    vote_ids: tuple[InternalId, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class MemberVote:
    member_id: InternalId
    choice: VoteChoice


@dataclass(frozen=True, slots=True, kw_only=True)
class VoteDetails:
    id: InternalId
    name: str
    occurred_at: datetime | None = None
    member_votes: tuple[MemberVote, ...] = field(default_factory=tuple)


def external_id_of(
    entity: Jurisdiction | Chamber | ChamberRef | Session | Member | Legislation,
) -> ExternalId | None:
    """Return the external id of ``entity`` if it has one."""

    if entity.external is None:
        return None
    return entity.external.external_id
