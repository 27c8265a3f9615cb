from __future__ import annotations

import pytest

from legisync.domain.errors import NotFoundError
from legisync.domain.sync import IdentityResolver, JurisdictionReconciler
from tests.helpers.fakes import FakeRemoteStore, make_jurisdiction


def test_sync_creates_jurisdiction_and_chambers(
    store: FakeRemoteStore, resolver: IdentityResolver
) -> None:
    reconciler = JurisdictionReconciler(make_jurisdiction("GA"), store, resolver)

    result = reconciler.sync()

    assert result.jurisdiction_created is True
    assert result.jurisdiction_name == "GA"
    assert len(result.chambers_created) == 2
    assert result.chambers_updated == []
    assert {chamber.name for chamber in result.chambers_created} == {"House", "Senate"}
    assert reconciler.get().id == result.jurisdiction_id


def test_sync_is_a_no_op_on_rerun(store: FakeRemoteStore) -> None:
    JurisdictionReconciler(make_jurisdiction("GA"), store, IdentityResolver(store)).sync()
    store.calls.clear()

    result = JurisdictionReconciler(make_jurisdiction("GA"), store, IdentityResolver(store)).sync()

    assert result.jurisdiction_created is False
    assert len(result.chambers_updated) == 2
    assert result.chambers_created == []
    assert not [call for call in store.calls if call.startswith("create_")]


def test_sync_creates_only_missing_chambers(store: FakeRemoteStore) -> None:
    JurisdictionReconciler(
        make_jurisdiction("GA", ["house"]), store, IdentityResolver(store)
    ).sync()

    result = JurisdictionReconciler(
        make_jurisdiction("GA", ["house", "senate"]), store, IdentityResolver(store)
    ).sync()

    assert [chamber.name for chamber in result.chambers_created] == ["Senate"]
    assert [chamber.name for chamber in result.chambers_updated] == ["House"]


def test_sync_seeds_resolver(store: FakeRemoteStore, resolver: IdentityResolver) -> None:
    JurisdictionReconciler(make_jurisdiction("GA"), store, resolver).sync()
    store.calls.clear()

    resolver.jurisdiction("ga")
    resolver.chamber("house")
    resolver.chamber("senate")

    assert store.calls == []


def test_get_propagates_not_found(store: FakeRemoteStore, resolver: IdentityResolver) -> None:
    reconciler = JurisdictionReconciler(make_jurisdiction("GA"), store, resolver)

    with pytest.raises(NotFoundError):
        reconciler.get()
    assert store.call_count("create_jurisdiction") == 0
