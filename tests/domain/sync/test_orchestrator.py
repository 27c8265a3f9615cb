from __future__ import annotations

import pytest

from legisync.domain.errors import JurisdictionNotFoundError, MissingExternalIdError
from legisync.domain.model import (
    CreateSessionRequest,
    ExternalChamberMember,
    ExternalSponsor,
    SponsorshipType,
)
from legisync.domain.sync import SyncOrchestrator, build_sync_orchestrator
from tests.helpers.fakes import (
    FakeExternalSource,
    FakeRemoteStore,
    make_jurisdiction,
    make_legislation,
    make_member,
    make_session,
)


def _source(bill_count: int = 1) -> FakeExternalSource:
    sponsor = ExternalSponsor(member_external_id="alice", sponsor_type=SponsorshipType.PRIMARY)
    return FakeExternalSource(
        make_jurisdiction("GA"),
        sessions=[make_session("2025")],
        members={("2025", "house"): [ExternalChamberMember(member=make_member("alice"))]},
        legislation={
            "2025": [
                make_legislation(f"hb{index}", sponsors=(sponsor,)) for index in range(bill_count)
            ]
        },
    )


def _ready(
    store: FakeRemoteStore, source: FakeExternalSource, **kwargs: int
) -> tuple[SyncOrchestrator, int]:
    orchestrator = build_sync_orchestrator(
        source, store, dangerously_create_jurisdiction=True, **kwargs
    )
    session = orchestrator.sync_sessions().created[0]
    orchestrator.update_members(session.id)
    return orchestrator, session.id


def test_build_refuses_missing_jurisdiction(store: FakeRemoteStore) -> None:
    with pytest.raises(JurisdictionNotFoundError):
        build_sync_orchestrator(_source(), store)

    assert store.jurisdictions == {}
    assert store.chambers == {}


def test_build_creates_jurisdiction_when_asked(store: FakeRemoteStore) -> None:
    orchestrator = build_sync_orchestrator(_source(), store, dangerously_create_jurisdiction=True)

    assert orchestrator.jurisdiction_id in store.jurisdictions
    assert len(store.chambers) == 2


def test_build_reuses_existing_jurisdiction(store: FakeRemoteStore) -> None:
    build_sync_orchestrator(_source(), store, dangerously_create_jurisdiction=True)
    store.calls.clear()

    build_sync_orchestrator(_source(), store, dangerously_create_jurisdiction=True)
    build_sync_orchestrator(_source(), store)

    assert not [call for call in store.calls if call.startswith("create_")]


def test_session_operations_require_external_id(store: FakeRemoteStore) -> None:
    orchestrator = build_sync_orchestrator(_source(), store, dangerously_create_jurisdiction=True)
    manual = store.create_session(orchestrator.jurisdiction_id, CreateSessionRequest(name="Manual"))

    with pytest.raises(MissingExternalIdError):
        orchestrator.update_members(manual.id)
    with pytest.raises(MissingExternalIdError):
        orchestrator.update_legislation_with_pagination(manual.id)


def test_update_members_reports_partition(store: FakeRemoteStore) -> None:
    orchestrator, session_id = _ready(store, _source())

    result = orchestrator.update_members(session_id)

    assert result.maybe_new == []
    assert [seat.member.external_id for seat in result.duplicates] == ["alice"]


def test_legislation_is_created_then_unchanged(store: FakeRemoteStore) -> None:
    orchestrator, session_id = _ready(store, _source())

    first = orchestrator.update_legislation_with_pagination(session_id)
    second = orchestrator.update_legislation_with_pagination(session_id)

    assert [item.name_id for item in first.created] == ["HB0"]
    assert second.created == []
    assert second.updated == []
    assert [item.id for item in second.unchanged] == [item.id for item in first.created]
    assert store.call_count("update_legislation") == 0
    legislation_id = first.created[0].id
    assert [sponsor.sponsor_type for sponsor in store.sponsors[legislation_id]] == [
        SponsorshipType.PRIMARY
    ]


def test_changed_legislation_is_updated(store: FakeRemoteStore) -> None:
    source = _source()
    orchestrator, session_id = _ready(store, source)
    orchestrator.update_legislation_with_pagination(session_id)

    source.legislation["2025"] = [make_legislation("hb0", title="An amended act")]
    result = orchestrator.update_legislation_with_pagination(session_id)

    assert [item.title for item in result.updated] == ["An amended act"]
    assert store.call_count("create_legislation") == 1


def test_max_pages_bounds_the_fetch(store: FakeRemoteStore) -> None:
    source = _source(bill_count=10)
    orchestrator, session_id = _ready(store, source, legislation_page_size=2)

    result = orchestrator.update_legislation_with_pagination(session_id, max_pages=2)

    assert result.pages_fetched == 3
    assert [query.page for query in source.queries] == [0, 1, 2]
    assert len(result.created) == 6


def test_existing_legislation_is_read_across_remote_pages(store: FakeRemoteStore) -> None:
    orchestrator, session_id = _ready(store, _source(bill_count=5), remote_page_size=2)
    orchestrator.update_legislation_with_pagination(session_id)

    result = orchestrator.update_legislation_with_pagination(session_id)

    assert result.created == []
    assert len(result.unchanged) == 5


def test_list_legislation_reads_the_store(store: FakeRemoteStore) -> None:
    orchestrator, session_id = _ready(store, _source(bill_count=3))
    orchestrator.update_legislation_with_pagination(session_id)

    page = orchestrator.list_legislation(session_id, page=1, page_size=2)

    assert page.page == 1
    assert page.num_pages == 2
    assert page.num_items == 3
    assert len(page.items) == 1


def test_delete_session(store: FakeRemoteStore) -> None:
    orchestrator, session_id = _ready(store, _source())

    orchestrator.delete_session(session_id)

    assert session_id not in store.sessions


def test_known_items_stop_a_latest_first_sync_early(store: FakeRemoteStore) -> None:
    source = _source(bill_count=6)
    orchestrator, session_id = _ready(store, source, legislation_page_size=2)
    orchestrator.update_legislation_with_pagination(session_id)
    source.queries.clear()

    result = orchestrator.update_legislation_with_pagination(session_id, max_consecutive_known=3)

    assert result.stopped_early is True
    assert [query.page for query in source.queries] == [0, 1]
    assert result.pages_fetched == 2
    assert [item.name_id for item in result.unchanged] == ["HB0", "HB1", "HB2"]


def test_new_items_reset_the_known_streak(store: FakeRemoteStore) -> None:
    source = _source(bill_count=4)
    orchestrator, session_id = _ready(store, source, legislation_page_size=2)
    orchestrator.update_legislation_with_pagination(session_id)
    items = source.legislation["2025"]
    source.legislation["2025"] = [items[0], make_legislation("hb9"), *items[1:]]

    result = orchestrator.update_legislation_with_pagination(session_id, max_consecutive_known=2)

    assert result.stopped_early is True
    assert [item.name_id for item in result.created] == ["HB9"]
    assert [item.name_id for item in result.unchanged] == ["HB0", "HB1", "HB2"]


def test_earliest_first_sync_never_stops_early(store: FakeRemoteStore) -> None:
    source = _source(bill_count=6)
    source.supports_latest = False
    orchestrator, session_id = _ready(store, source, legislation_page_size=2)
    orchestrator.update_legislation_with_pagination(session_id)

    result = orchestrator.update_legislation_with_pagination(session_id, max_consecutive_known=1)

    assert result.stopped_early is False
    assert len(result.unchanged) == 6
