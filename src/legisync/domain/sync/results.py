"""Outcomes reported by each reconciler call."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from legisync.domain.model import (
        Chamber,
        ExternalChamberMember,
        InternalId,
        Legislation,
        Session,
    )


class LoopStatus(StrEnum):
    FINISHED = "finished"
    NEEDS_ANOTHER_LOOP = "needs_another_loop"


@dataclass(slots=True, kw_only=True)
class JurisdictionSyncResult:
    jurisdiction_id: InternalId
    jurisdiction_name: str
    jurisdiction_created: bool
    chambers_created: list[Chamber] = field(default_factory=list["Chamber"])
    chambers_updated: list[Chamber] = field(default_factory=list["Chamber"])


@dataclass(slots=True)
class SessionsSyncResult:
    created: list[Session] = field(default_factory=list["Session"])
    updated: list[Session] = field(default_factory=list["Session"])


@dataclass(slots=True)
class MembersSyncResult:
    """Partition of a chamber-session's fetched members."""

    maybe_new: list[ExternalChamberMember] = field(default_factory=list["ExternalChamberMember"])
    duplicates: list[ExternalChamberMember] = field(default_factory=list["ExternalChamberMember"])

    def extend(self, other: MembersSyncResult) -> None:
        self.maybe_new.extend(other.maybe_new)
        self.duplicates.extend(other.duplicates)


@dataclass(slots=True)
class VotesSyncResult:
    created: list[InternalId] = field(default_factory=list["InternalId"])
    updated: list[InternalId] = field(default_factory=list["InternalId"])
    unchanged: list[InternalId] = field(default_factory=list["InternalId"])

    def extend(self, other: VotesSyncResult) -> None:
        self.created.extend(other.created)
        self.updated.extend(other.updated)
        self.unchanged.extend(other.unchanged)


@dataclass(slots=True)
class LegislationSyncResult:
    created: list[Legislation] = field(default_factory=list["Legislation"])
    updated: list[Legislation] = field(default_factory=list["Legislation"])
    unchanged: list[Legislation] = field(default_factory=list["Legislation"])
    pages_fetched: int = 0
    stopped_early: bool = False
    votes: VotesSyncResult = field(default_factory=VotesSyncResult)

    @property
    def processed(self) -> int:
        return len(self.created) + len(self.updated) + len(self.unchanged)

