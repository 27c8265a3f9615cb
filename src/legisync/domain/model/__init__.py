"""Public domain model surface."""

from __future__ import annotations

from legisync.domain.model.entities import (
    Chamber,
    ChamberRef,
    ChamberSession,
    ExternalId,
    ExternalMetadata,
    InternalId,
    Jurisdiction,
    Legislation,
    Member,
    MemberVote,
    Session,
    VoteDetails,
    external_id_of,
)
from legisync.domain.model.enums import (
    LegislationOrder,
    LegislationStatus,
    LegislationType,
    MemberAction,
    SponsorshipType,
    VoteChoice,
    VoteExistsAction,
    VoteType,
)
from legisync.domain.model.external import (
    ExternalChamber,
    ExternalChamberMember,
    ExternalJurisdiction,
    ExternalLegislation,
    ExternalLegislationVote,
    ExternalMember,
    ExternalMemberVote,
    ExternalSession,
    ExternalSourceConfig,
    ExternalSponsor,
    LegislationQuery,
    needs_update,
)
from legisync.domain.model.pagination import Paginated
from legisync.domain.model.requests import (
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

__all__ = [
    "Chamber",
    "ChamberRef",
    "ChamberSession",
    "CreateChamberRequest",
    "CreateJurisdictionRequest",
    "CreateLegislationRequest",
    "CreateMemberRequest",
    "CreateSessionRequest",
    "CreateVoteRequest",
    "ExternalChamber",
    "ExternalChamberMember",
    "ExternalId",
    "ExternalJurisdiction",
    "ExternalLegislation",
    "ExternalLegislationVote",
    "ExternalMember",
    "ExternalMemberVote",
    "ExternalMetadata",
    "ExternalSession",
    "ExternalSourceConfig",
    "ExternalSponsor",
    "InternalId",
    "Jurisdiction",
    "Legislation",
    "LegislationOrder",
    "LegislationQuery",
    "LegislationStatus",
    "LegislationType",
    "LinkMemberRequest",
    "Member",
    "MemberAction",
    "MemberVote",
    "MemberVoteInput",
    "Paginated",
    "Session",
    "SponsorInput",
    "SponsorshipType",
    "UpdateLegislationRequest",
    "UpdateSessionRequest",
    "UpdateVoteRequest",
    "VoteChoice",
    "VoteDetails",
    "VoteExistsAction",
    "VoteType",
    "external_id_of",
    "needs_update",
]
