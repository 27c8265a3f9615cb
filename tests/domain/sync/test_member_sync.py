from __future__ import annotations

import pytest

from legisync.domain.errors import RemoteError
from legisync.domain.model import (
    CreateChamberRequest,
    CreateJurisdictionRequest,
    CreateMemberRequest,
    ExternalChamberMember,
    ExternalMetadata,
    Session,
)
from legisync.domain.sync import (
    IdentityResolver,
    JurisdictionReconciler,
    MemberReconciler,
    SessionReconciler,
    sync_session_members,
)
from tests.helpers.fakes import (
    FakeExternalSource,
    FakeRemoteStore,
    make_jurisdiction,
    make_member,
    make_session,
)


def _seat(external_id: str, district: int) -> ExternalChamberMember:
    return ExternalChamberMember(member=make_member(external_id), district_number=district)


@pytest.fixture
def source() -> FakeExternalSource:
    return FakeExternalSource(
        make_jurisdiction("GA"),
        sessions=[make_session("2025")],
        members={
            ("2025", "house"): [_seat("alice", 1), _seat("bob", 2)],
            ("2025", "senate"): [_seat("carol", 3)],
        },
    )


@pytest.fixture
def session(
    store: FakeRemoteStore, resolver: IdentityResolver, source: FakeExternalSource
) -> Session:
    jurisdiction = JurisdictionReconciler(source.get_jurisdiction(), store, resolver)
    jurisdiction.sync()
    created = SessionReconciler(jurisdiction, source, store, resolver).sync_sessions().created[0]
    return store.get_session(created.id)


def test_new_members_are_created_and_linked(
    store: FakeRemoteStore,
    resolver: IdentityResolver,
    source: FakeExternalSource,
    session: Session,
) -> None:
    result = MemberReconciler("2025", "house", source, store, resolver).sync()

    assert [seat.member.external_id for seat in result.maybe_new] == ["alice", "bob"]
    assert result.duplicates == []
    house = resolver.chamber("house")
    links = store.member_links[(session.id, house.id)]
    assert [link.district_number for link in links] == [1, 2]
    assert {link.member_id for link in links} == {
        resolver.member("alice").id,
        resolver.member("bob").id,
    }


def test_linked_members_are_duplicates(
    store: FakeRemoteStore,
    resolver: IdentityResolver,
    source: FakeExternalSource,
    session: Session,  # noqa: ARG001
) -> None:
    MemberReconciler("2025", "house", source, store, resolver).sync()
    store.calls.clear()

    result = MemberReconciler("2025", "house", source, store, resolver).sync()

    assert result.maybe_new == []
    assert [seat.member.external_id for seat in result.duplicates] == ["alice", "bob"]
    assert store.call_count("create_member") == 0
    assert store.call_count("link_member_to_chamber") == 0


def test_known_member_is_linked_without_creating(
    store: FakeRemoteStore,
    resolver: IdentityResolver,
    source: FakeExternalSource,
    session: Session,  # noqa: ARG001
) -> None:
    existing = store.create_member(
        CreateMemberRequest(display_name="Alice", external=ExternalMetadata("alice"))
    )

    result = MemberReconciler("2025", "house", source, store, resolver).sync()

    assert len(result.maybe_new) == 2
    assert store.call_count("create_member") == 2
    assert resolver.member("alice") == existing


def test_session_members_cover_every_chamber(
    store: FakeRemoteStore,
    resolver: IdentityResolver,
    source: FakeExternalSource,
    session: Session,
) -> None:
    result = sync_session_members(session, source, store, resolver)

    assert sorted(seat.member.external_id for seat in result.maybe_new) == [
        "alice",
        "bob",
        "carol",
    ]


def test_session_members_skip_unknown_chambers(
    store: FakeRemoteStore,
    resolver: IdentityResolver,
    source: FakeExternalSource,
    session: Session,
) -> None:
    other = store.create_jurisdiction(
        CreateJurisdictionRequest(name="TX", external=ExternalMetadata("tx"))
    )
    stray = store.create_chamber(
        other.id, CreateChamberRequest(name="Assembly", external=ExternalMetadata("assembly"))
    )
    store.link_chamber_to_session(session.id, stray.id)

    result = sync_session_members(store.get_session(session.id), source, store, resolver)

    assert len(result.maybe_new) == 3


def test_session_members_propagate_other_errors(
    store: FakeRemoteStore,
    resolver: IdentityResolver,
    source: FakeExternalSource,
    session: Session,
) -> None:
    store.errors["get_chamber_session"] = RemoteError("boom", status=500)

    with pytest.raises(RemoteError):
        sync_session_members(session, source, store, resolver)
