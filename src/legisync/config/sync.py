"""Synchronization defaults for the reconciliation engine."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_int_env_var

DEFAULT_LEGISLATION_PAGE_SIZE = 20
DEFAULT_REMOTE_PAGE_SIZE = 100


@dataclass(frozen=True, slots=True)
class SyncConfig:
    legislation_page_size: int = DEFAULT_LEGISLATION_PAGE_SIZE
    remote_page_size: int = DEFAULT_REMOTE_PAGE_SIZE


def get_sync_config() -> SyncConfig:
    return SyncConfig(
        legislation_page_size=optional_int_env_var(
            "LEGISYNC_LEGISLATION_PAGE_SIZE", DEFAULT_LEGISLATION_PAGE_SIZE
        ),
        remote_page_size=optional_int_env_var(
            "LEGISYNC_REMOTE_PAGE_SIZE", DEFAULT_REMOTE_PAGE_SIZE
        ),
    )
