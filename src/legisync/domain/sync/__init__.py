"""Reconciliation engine: bring the remote store in line with an external source."""

from __future__ import annotations

from .jurisdiction import JurisdictionReconciler
from .legislation import LegislationReconciler, needs_update
from .members import MemberReconciler, sync_session_members
from .orchestrator import SyncOrchestrator, build_sync_orchestrator
from .resolver import EntityKind, IdentityResolver
from .results import (
    JurisdictionSyncResult,
    LegislationSyncResult,
    LoopStatus,
    MembersSyncResult,
    SessionsSyncResult,
    VotesSyncResult,
)
from .sessions import SessionReconciler
from .votes import VoteReconciler

__all__ = [
    "EntityKind",
    "IdentityResolver",
    "JurisdictionReconciler",
    "JurisdictionSyncResult",
    "LegislationReconciler",
    "LegislationSyncResult",
    "LoopStatus",
    "MemberReconciler",
    "MembersSyncResult",
    "SessionReconciler",
    "SessionsSyncResult",
    "SyncOrchestrator",
    "VoteReconciler",
    "VotesSyncResult",
    "build_sync_orchestrator",
    "needs_update",
    "sync_session_members",
]
