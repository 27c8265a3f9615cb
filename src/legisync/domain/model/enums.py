"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class LegislationType(StrEnum):
    RESOLUTION = "resolution"
    BILL = "bill"
    OTHER = "other"


class LegislationStatus(StrEnum):
    """What ultimately happened to a piece of legislation."""

    PENDING = "pending"
    PASSED = "passed"
    FAILED = "failed"
    SIGNED = "signed"
    VETOED = "vetoed"
    VETO_OVERRIDDEN = "veto_overridden"
    WITHDRAWN = "withdrawn"


class SponsorshipType(StrEnum):
    PRIMARY = "primary"
    COSPONSOR = "cosponsor"
    OTHER = "other"


class VoteType(StrEnum):
    UNKNOWN = "unknown"
    PASSAGE = "passage"
    PROCEDURAL = "procedural"
    VETO_OVERRIDE = "veto_override"


class VoteChoice(StrEnum):
    YES = "yes"
    NO = "no"
    ABSENT = "absent"
    NOT_VOTING = "not_voting"


class LegislationOrder(StrEnum):
    """Ordering requested from an external source when paging legislation."""

    LATEST = "latest"
    EARLIEST = "earliest"


class MemberAction(StrEnum):
    """What vote sync does when a voting member is unknown to the store."""

    FAIL = "fail"
    SKIP = "skip"
    CREATE = "create"


class VoteExistsAction(StrEnum):
    """What vote sync does when the store reports a vote already exists."""

    FAIL = "fail"
    UPDATE = "update"
