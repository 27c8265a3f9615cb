"""Application wiring entry points."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from importlib import import_module
from logging import getLogger
from typing import TYPE_CHECKING

from legisync.adapters.remote import RestRemoteStore
from legisync.config import (
    ConfigurationError,
    MissingConfigurationError,
    get_remote_store_config,
    get_sync_config,
)
from legisync.domain.ports import ExternalSource
from legisync.domain.sync import build_sync_orchestrator

if TYPE_CHECKING:
    from legisync.domain.ports import RemoteStore
    from legisync.domain.sync import (
        LegislationSyncResult,
        MembersSyncResult,
        SessionsSyncResult,
        SyncOrchestrator,
    )

log = getLogger(__name__)

SOURCE_ENV_VAR = "LEGISYNC_SOURCE"


@dataclass(slots=True)
class FullSyncResult:
    """Outcome of a sessions, members and legislation pass."""

    sessions: SessionsSyncResult
    members: dict[int, MembersSyncResult] = field(default_factory=dict[int, "MembersSyncResult"])
    legislation: dict[int, LegislationSyncResult] = field(
        default_factory=dict[int, "LegislationSyncResult"]
    )


def load_external_source(target: str | None = None) -> ExternalSource:
    """Import an external source from ``module:attribute``.

    The attribute may be a source instance or a zero-argument factory
    returning one. Falls back to the ``LEGISYNC_SOURCE`` environment variable.
    """

    target = target or os.getenv(SOURCE_ENV_VAR)
    if not target:
        raise MissingConfigurationError([SOURCE_ENV_VAR], hint="or pass --source")
    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        raise ConfigurationError(
            f"External source must look like 'module:attribute', got {target!r}"
        )
    try:
        candidate = getattr(import_module(module_name), attribute)
    except (ImportError, AttributeError) as exc:
        raise ConfigurationError(f"Cannot load external source {target!r}: {exc}") from exc

    source = candidate
    if isinstance(candidate, type) or not isinstance(candidate, ExternalSource):
        if not callable(candidate):
            raise ConfigurationError(f"{target!r} is neither an ExternalSource nor a factory")
        source = candidate()
    if not isinstance(source, ExternalSource):
        raise ConfigurationError(f"{target!r} does not provide an ExternalSource")
    return source


def build_orchestrator(
    source: ExternalSource,
    *,
    remote: RemoteStore | None = None,
    dangerously_create_jurisdiction: bool = False,
) -> SyncOrchestrator:
    """Bind ``source`` to the configured remote store."""

    effective_remote = remote or RestRemoteStore(config=get_remote_store_config())
    sync_config = get_sync_config()
    return build_sync_orchestrator(
        source,
        effective_remote,
        dangerously_create_jurisdiction=dangerously_create_jurisdiction,
        legislation_page_size=sync_config.legislation_page_size,
        remote_page_size=sync_config.remote_page_size,
    )


def run_full_sync(
    orchestrator: SyncOrchestrator,
    *,
    max_pages: int | None = None,
    max_consecutive_known: int | None = None,
) -> FullSyncResult:
    """Sync sessions, then members and legislation for every synced session."""

    sessions = orchestrator.sync_sessions()
    log.info(
        "Sessions synced: created=%s, updated=%s", len(sessions.created), len(sessions.updated)
    )
    result = FullSyncResult(sessions=sessions)
    for session in [*sessions.created, *sessions.updated]:
        result.members[session.id] = orchestrator.update_members(session.id)
        result.legislation[session.id] = orchestrator.update_legislation_with_pagination(
            session.id, max_pages=max_pages, max_consecutive_known=max_consecutive_known
        )
    return result
