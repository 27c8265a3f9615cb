from __future__ import annotations

import json
from collections.abc import Callable  # noqa: TC003
from datetime import UTC, date, datetime

import httpx
import pytest

from legisync.adapters.http_resilience import ResilientClient
from legisync.adapters.remote import RestRemoteStore
from legisync.config import RemoteStoreConfig, ResilienceConfig
from legisync.domain.errors import RemoteError
from legisync.domain.model import (
    CreateSessionRequest,
    CreateVoteRequest,
    ExternalMetadata,
    LegislationStatus,
    LegislationType,
    MemberVoteInput,
    VoteChoice,
    VoteType,
)
from legisync.domain.ports import RemoteStore
from tests.helpers.fakes import FakeRemoteStore

BASE_URL = "https://store.test"


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            base_url=BASE_URL, transport=httpx.MockTransport(async_handler)
        )
        return client

    return factory


def _store(handler: Callable[[httpx.Request], httpx.Response]) -> RestRemoteStore:
    config = RemoteStoreConfig(
        base_url=BASE_URL,
        api_token="secret",
        resilience=ResilienceConfig(name="test", base_url=BASE_URL),
    )
    return RestRemoteStore(config=config, client_factory=_make_client_factory(handler))


def _page(data: list[dict[str, object]], *, page: int = 0, num_pages: int = 1) -> dict[str, object]:
    return {
        "data": data,
        "page": page,
        "page_size": 100,
        "num_items": len(data),
        "num_pages": num_pages,
    }


def test_list_jurisdictions_filters_by_external_id() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json=_page(
                [
                    {
                        "id": 1,
                        "name": "GA",
                        "external": {"external_id": "ga", "url": "https://ga.test"},
                        "chambers": [{"id": 2, "name": "House"}],
                    }
                ]
            ),
        )

    jurisdictions = _store(handler).list_jurisdictions(external_id="ga")

    assert len(seen) == 1
    assert seen[0].url.path == "/api/jurisdictions"
    assert seen[0].url.params["external_id"] == "ga"
    assert seen[0].url.params["page"] == "0"
    assert jurisdictions[0].id == 1
    assert jurisdictions[0].external == ExternalMetadata("ga", url="https://ga.test")
    assert jurisdictions[0].chambers[0].name == "House"


def test_list_chambers_reads_every_page() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        page = int(request.url.params["page"])
        chamber = {"id": page + 10, "name": f"Chamber {page}", "jurisdiction_id": 1}
        return httpx.Response(200, json=_page([chamber], page=page, num_pages=2))

    chambers = _store(handler).list_chambers(jurisdiction_id=1)

    assert [chamber.id for chamber in chambers] == [10, 11]


def test_create_session_posts_json_body() -> None:
    bodies: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.url.path == "/api/jurisdictions/1/sessions"
        bodies.append(json.loads(request.content))
        return httpx.Response(
            201,
            json={
                "id": 5,
                "name": "2025 Regular Session",
                "jurisdiction_id": 1,
                "starts_at": "2025-01-13",
                "external": {"external_id": "2025"},
            },
        )

    session = _store(handler).create_session(
        1,
        CreateSessionRequest(
            name="2025 Regular Session",
            starts_at=date(2025, 1, 13),
            external=ExternalMetadata("2025"),
        ),
    )

    assert bodies == [
        {
            "name": "2025 Regular Session",
            "starts_at": "2025-01-13",
            "external": {"external_id": "2025"},
        }
    ]
    assert session.id == 5
    assert session.starts_at == date(2025, 1, 13)


def test_status_errors_become_remote_errors() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(409, json={"error": "conflict", "description": "already linked"})

    with pytest.raises(RemoteError) as exc:
        _store(handler).link_chamber_to_session(5, 2)

    assert exc.value.status == 409
    assert exc.value.is_conflict
    assert json.loads(exc.value.body)["description"] == "already linked"
    assert "already linked" in str(exc.value)


def test_transport_errors_become_remote_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(RemoteError) as exc:
        _store(handler).get_session(5)

    assert exc.value.status is None
    assert isinstance(exc.value.__cause__, httpx.ConnectError)


def test_unexpected_payload_becomes_remote_error() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"name": "missing id"})

    with pytest.raises(RemoteError, match="SessionPayload"):
        _store(handler).get_session(5)


def test_list_legislation_translates_page() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["session_id"] == "5"
        assert request.url.params["page_size"] == "2"
        return httpx.Response(
            200,
            json={
                "data": [
                    {
                        "id": 9,
                        "name_id": "HB1",
                        "title": "An act",
                        "legislation_type": "bill",
                        "status": "passed",
                        "status_text": "Passed",
                        "status_updated_at": "2025-03-01T12:00:00Z",
                        "session_id": 5,
                        "chamber_id": 2,
                        "external": {"external_id": "hb1"},
                    }
                ],
                "page": 1,
                "page_size": 2,
                "num_items": 3,
                "num_pages": 2,
            },
        )

    page = _store(handler).list_legislation(session_id=5, page=1, page_size=2)

    assert page.page == 1
    assert page.num_pages == 2
    assert page.is_last_page
    item = page.items[0]
    assert item.legislation_type is LegislationType.BILL
    assert item.status is LegislationStatus.PASSED
    assert item.status_updated_at == datetime(2025, 3, 1, 12, tzinfo=UTC)


def test_create_vote_returns_new_id() -> None:
    bodies: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/legislation/9/votes"
        bodies.append(json.loads(request.content))
        return httpx.Response(201, json={"id": 77})

    vote_id = _store(handler).create_vote(
        9,
        CreateVoteRequest(
            name="Third reading",
            vote_type=VoteType.PASSAGE,
            member_votes=(MemberVoteInput(member_id=3, choice=VoteChoice.NO),),
        ),
    )

    assert vote_id == 77
    assert bodies[0]["member_votes"] == [{"member_id": 3, "vote": "no"}]
    assert bodies[0]["vote_type"] == "passage"


def test_get_vote_translates_member_votes() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "id": 77,
                "name": "Third reading",
                "member_votes": [{"member_id": 3, "vote": "yes"}],
            },
        )

    vote = _store(handler).get_vote(9, 77)

    assert vote.member_votes[0].choice is VoteChoice.YES


def test_delete_session_accepts_empty_response() -> None:
    methods: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        methods.append(request.method)
        return httpx.Response(204)

    _store(handler).delete_session(5)

    assert methods == ["DELETE"]


def test_store_implementations_match_the_port() -> None:
    def unused(_: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    port_methods = {name for name in dir(RemoteStore) if not name.startswith("_")}
    for implementation in (_store(unused), FakeRemoteStore()):
        assert isinstance(implementation, RemoteStore)
        public = {name for name in dir(implementation) if not name.startswith("_")}
        assert port_methods <= public
