from __future__ import annotations

import pytest

from legisync.domain.sync import IdentityResolver
from tests.helpers.fakes import FakeRemoteStore


@pytest.fixture
def store() -> FakeRemoteStore:
    return FakeRemoteStore()


@pytest.fixture
def resolver(store: FakeRemoteStore) -> IdentityResolver:
    return IdentityResolver(store)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "LEGISYNC_API_URL",
        "LEGISYNC_API_TOKEN",
        "LEGISYNC_SOURCE",
        "LEGISYNC_LEGISLATION_PAGE_SIZE",
        "LEGISYNC_REMOTE_PAGE_SIZE",
    ):
        monkeypatch.delenv(name, raising=False)
