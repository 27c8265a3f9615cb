"""Pydantic models describing the remote store's REST payloads."""

from __future__ import annotations

import logging
from datetime import date, datetime  # noqa: TC003
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from legisync.domain.model import (  # noqa: TC001
    LegislationStatus,
    LegislationType,
    VoteChoice,
)

log = logging.getLogger(__name__)


class RemoteBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow")
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.debug(
            "Remote store %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class ExternalMetadataPayload(RemoteBaseModel):
    external_id: str
    url: str | None = None
    externally_updated_at: datetime | None = None


class ChamberRefPayload(RemoteBaseModel):
    id: int
    name: str
    external: ExternalMetadataPayload | None = None


class JurisdictionPayload(RemoteBaseModel):
    id: int
    name: str
    external: ExternalMetadataPayload | None = None
    chambers: list[ChamberRefPayload] = Field(default_factory=list)


class ChamberPayload(RemoteBaseModel):
    id: int
    name: str
    jurisdiction_id: int
    external: ExternalMetadataPayload | None = None


class SessionPayload(RemoteBaseModel):
    id: int
    name: str
    jurisdiction_id: int
    starts_at: date | None = None
    ends_at: date | None = None
    external: ExternalMetadataPayload | None = None
    chambers: list[ChamberRefPayload] = Field(default_factory=list)


class MemberPayload(RemoteBaseModel):
    id: int
    display_name: str
    full_name: str | None = None
    party: str | None = None
    bio: str | None = None
    photo_url: str | None = None
    external: ExternalMetadataPayload | None = None


class ChamberSessionPayload(RemoteBaseModel):
    session_id: int
    chamber_id: int
    members: list[MemberPayload] = Field(default_factory=list)


class LegislationPayload(RemoteBaseModel):
    id: int
    name_id: str
    title: str
    legislation_type: LegislationType
    status_text: str = ""
    session_id: int
    chamber_id: int
    status: LegislationStatus | None = None
    status_updated_at: datetime | None = None
    introduced_at: datetime | None = None
    external: ExternalMetadataPayload | None = None
    vote_ids: list[int] = Field(default_factory=list)


class MemberVotePayload(RemoteBaseModel):
    member_id: int
    vote: VoteChoice


class VotePayload(RemoteBaseModel):
    id: int
    name: str
    occurred_at: datetime | None = None
    member_votes: list[MemberVotePayload] = Field(default_factory=list)


class CreatedPayload(RemoteBaseModel):
    id: int


class PagePayload[T](RemoteBaseModel):
    data: list[T]
    page: int = 0
    page_size: int = 0
    num_items: int = 0
    num_pages: int = 0


class ErrorPayload(RemoteBaseModel):
    error: str
    description: str = ""
