"""REST adapter implementing the ``RemoteStore`` port."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import BaseModel, ValidationError

from legisync.adapters.http_resilience import ResilientClient
from legisync.domain.errors import RemoteError

from . import translator
from .schema import (
    ChamberPayload,
    ChamberSessionPayload,
    CreatedPayload,
    ErrorPayload,
    JurisdictionPayload,
    LegislationPayload,
    MemberPayload,
    PagePayload,
    SessionPayload,
    VotePayload,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from legisync.config.http_resilience import ResilienceConfig
    from legisync.config.remote import RemoteStoreConfig
    from legisync.domain.model import (
        Chamber,
        ChamberSession,
        CreateChamberRequest,
        CreateJurisdictionRequest,
        CreateLegislationRequest,
        CreateMemberRequest,
        CreateSessionRequest,
        CreateVoteRequest,
        ExternalId,
        InternalId,
        Jurisdiction,
        Legislation,
        LinkMemberRequest,
        Member,
        Paginated,
        Session,
        SponsorInput,
        UpdateLegislationRequest,
        UpdateSessionRequest,
        UpdateVoteRequest,
        VoteDetails,
    )

    type Params = dict[str, str | int]

log = getLogger(__name__)

LIST_PAGE_SIZE = 100


class RestRemoteStore:
    """Synchronous facade over the store's REST API.

    Each call opens a short-lived :class:`ResilientClient` and runs it to
    completion with ``asyncio.run``. Every failure surfaces as ``RemoteError``.
    """

    def __init__(
        self,
        *,
        config: RemoteStoreConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    # jurisdictions

    def list_jurisdictions(self, *, external_id: ExternalId | None = None) -> list[Jurisdiction]:
        payloads = self._list_all("/api/jurisdictions", _filters(external_id=external_id))
        return [translator.to_jurisdiction(_validate(JurisdictionPayload, p)) for p in payloads]

    def create_jurisdiction(self, request: CreateJurisdictionRequest) -> Jurisdiction:
        payload = self._call(
            "POST", "/api/jurisdictions", json=translator.jurisdiction_body(request)
        )
        return translator.to_jurisdiction(_validate(JurisdictionPayload, payload))

    # chambers

    def list_chambers(
        self,
        *,
        jurisdiction_id: InternalId | None = None,
        external_id: ExternalId | None = None,
    ) -> list[Chamber]:
        params = _filters(jurisdiction_id=jurisdiction_id, external_id=external_id)
        payloads = self._list_all("/api/chambers", params)
        return [translator.to_chamber(_validate(ChamberPayload, p)) for p in payloads]

    def create_chamber(self, jurisdiction_id: InternalId, request: CreateChamberRequest) -> Chamber:
        payload = self._call(
            "POST",
            f"/api/jurisdictions/{jurisdiction_id}/chambers",
            json=translator.chamber_body(request),
        )
        return translator.to_chamber(_validate(ChamberPayload, payload))

    # sessions

    def list_sessions(
        self,
        *,
        jurisdiction_id: InternalId | None = None,
        external_id: ExternalId | None = None,
    ) -> list[Session]:
        params = _filters(jurisdiction_id=jurisdiction_id, external_id=external_id)
        payloads = self._list_all("/api/sessions", params)
        return [translator.to_session(_validate(SessionPayload, p)) for p in payloads]

    def get_session(self, session_id: InternalId) -> Session:
        payload = self._call("GET", f"/api/sessions/{session_id}")
        return translator.to_session(_validate(SessionPayload, payload))

    def create_session(self, jurisdiction_id: InternalId, request: CreateSessionRequest) -> Session:
        payload = self._call(
            "POST",
            f"/api/jurisdictions/{jurisdiction_id}/sessions",
            json=translator.session_body(request),
        )
        return translator.to_session(_validate(SessionPayload, payload))

    def update_session(self, session_id: InternalId, request: UpdateSessionRequest) -> Session:
        payload = self._call(
            "PATCH", f"/api/sessions/{session_id}", json=translator.session_update_body(request)
        )
        return translator.to_session(_validate(SessionPayload, payload))

    def delete_session(self, session_id: InternalId) -> None:
        self._call("DELETE", f"/api/sessions/{session_id}")

    def link_chamber_to_session(self, session_id: InternalId, chamber_id: InternalId) -> None:
        self._call("POST", f"/api/sessions/{session_id}/chambers", json={"chamber_id": chamber_id})

    def get_chamber_session(self, session_id: InternalId, chamber_id: InternalId) -> ChamberSession:
        payload = self._call("GET", f"/api/sessions/{session_id}/chambers/{chamber_id}")
        return translator.to_chamber_session(_validate(ChamberSessionPayload, payload))

    # members

    def list_members(self, *, external_id: ExternalId | None = None) -> list[Member]:
        payloads = self._list_all("/api/members", _filters(external_id=external_id))
        return [translator.to_member(_validate(MemberPayload, p)) for p in payloads]

    def create_member(self, request: CreateMemberRequest) -> Member:
        payload = self._call("POST", "/api/members", json=translator.member_body(request))
        return translator.to_member(_validate(MemberPayload, payload))

    def link_member_to_chamber(
        self,
        session_id: InternalId,
        chamber_id: InternalId,
        request: LinkMemberRequest,
    ) -> None:
        self._call(
            "POST",
            f"/api/sessions/{session_id}/chambers/{chamber_id}/members",
            json=translator.link_member_body(request),
        )

    # legislation

    def list_legislation(
        self,
        *,
        session_id: InternalId | None = None,
        external_id: ExternalId | None = None,
        page: int = 0,
        page_size: int = 20,
    ) -> Paginated[Legislation]:
        params = _filters(session_id=session_id, external_id=external_id)
        params.update(page=page, page_size=page_size)
        payload = self._call("GET", "/api/legislation", params=params)
        page_payload = _validate(PagePayload[LegislationPayload], payload)
        return translator.to_paginated(page_payload, translator.to_legislation)

    def create_legislation(
        self,
        session_id: InternalId,
        chamber_id: InternalId,
        request: CreateLegislationRequest,
    ) -> Legislation:
        payload = self._call(
            "POST",
            f"/api/sessions/{session_id}/chambers/{chamber_id}/legislation",
            json=translator.legislation_body(request),
        )
        return translator.to_legislation(_validate(LegislationPayload, payload))

    def update_legislation(
        self, legislation_id: InternalId, request: UpdateLegislationRequest
    ) -> Legislation:
        payload = self._call(
            "PATCH",
            f"/api/legislation/{legislation_id}",
            json=translator.legislation_update_body(request),
        )
        return translator.to_legislation(_validate(LegislationPayload, payload))

    def put_sponsors(self, legislation_id: InternalId, sponsors: list[SponsorInput]) -> None:
        self._call(
            "PUT",
            f"/api/legislation/{legislation_id}/sponsors",
            json=translator.sponsors_body(sponsors),
        )

    # votes

    def create_vote(self, legislation_id: InternalId, request: CreateVoteRequest) -> InternalId:
        payload = self._call(
            "POST", f"/api/legislation/{legislation_id}/votes", json=translator.vote_body(request)
        )
        if isinstance(payload, int):
            return payload
        return _validate(CreatedPayload, payload).id

    def get_vote(self, legislation_id: InternalId, vote_id: InternalId) -> VoteDetails:
        payload = self._call("GET", f"/api/legislation/{legislation_id}/votes/{vote_id}")
        return translator.to_vote_details(_validate(VotePayload, payload))

    def update_vote(
        self,
        legislation_id: InternalId,
        vote_id: InternalId,
        request: UpdateVoteRequest,
    ) -> VoteDetails:
        payload = self._call(
            "PATCH",
            f"/api/legislation/{legislation_id}/votes/{vote_id}",
            json=translator.vote_update_body(request),
        )
        return translator.to_vote_details(_validate(VotePayload, payload))

    # transport

    def _call(
        self,
        method: str,
        path: str,
        *,
        params: Params | None = None,
        json: object = None,
    ) -> object:
        return asyncio.run(self._call_async(method, path, params=params, json=json))

    def _list_all(self, path: str, params: Params) -> list[object]:
        return asyncio.run(self._list_all_async(path, params))

    async def _call_async(
        self,
        method: str,
        path: str,
        *,
        params: Params | None,
        json: object,
    ) -> object:
        async with self._client_factory(self._resilience) as client:
            return await self._perform_request(
                client=client, method=method, path=path, params=params, json=json
            )

    async def _list_all_async(self, path: str, params: Params) -> list[object]:
        items: list[object] = []
        page = 0
        async with self._client_factory(self._resilience) as client:
            while True:
                payload = await self._perform_request(
                    client=client,
                    method="GET",
                    path=path,
                    params={**params, "page": page, "page_size": LIST_PAGE_SIZE},
                    json=None,
                )
                page_payload = _validate(PagePayload[object], payload)
                items.extend(page_payload.data)
                if not page_payload.data or page_payload.page >= page_payload.num_pages - 1:
                    return items
                page += 1

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        method: str,
        path: str,
        params: Params | None,
        json: object,
    ) -> object:
        try:
            if json is None:
                response = await client.request(method, path, params=params)
            else:
                response = await client.request(method, path, params=params, json=json)
        except httpx.HTTPError as exc:
            raise RemoteError(f"{method} {path} failed: {exc}") from exc

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise _status_error(method, path, exc.response) from exc

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise RemoteError(
                f"{method} {path} returned invalid JSON",
                status=response.status_code,
                body=response.text,
            ) from exc


def _filters(**values: str | int | None) -> Params:
    return {key: value for key, value in values.items() if value is not None}


def _validate[M: BaseModel](model: type[M], payload: object) -> M:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise RemoteError(f"Unexpected {model.__name__} payload: {exc}") from exc


def _status_error(method: str, path: str, response: httpx.Response) -> RemoteError:
    body = response.text
    try:
        error = ErrorPayload.model_validate_json(body)
    except ValidationError:
        detail = body
    else:
        detail = f"{error.error}: {error.description}" if error.description else error.error
    log.debug("%s %s returned %s: %s", method, path, response.status_code, detail)
    return RemoteError(
        f"{method} {path} returned {response.status_code}: {detail}",
        status=response.status_code,
        body=body,
    )
