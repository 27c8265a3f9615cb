"""Paginated incremental fetch of a session's legislation."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from legisync.domain.errors import UnsupportedOrderingError
from legisync.domain.model import LegislationOrder, LegislationQuery, needs_update

from .results import LoopStatus

if TYPE_CHECKING:
    from collections.abc import Iterator

    from legisync.domain.model import ExternalId, ExternalLegislation, Paginated
    from legisync.domain.ports import ExternalSource

log = getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


class LegislationReconciler:
    """State machine for one pagination pass over a session's legislation.

    Call :meth:`run_loop` until it reports ``LoopStatus.FINISHED``, then
    consume the collected items with :meth:`drain_new_legislation`. The loop
    requests at most ``min(num_pages, max_page + 1)`` pages.
    """

    def __init__(
        self,
        session_external_id: ExternalId,
        *,
        max_page: int | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self.session_external_id = session_external_id
        self.page = 0
        self.page_size = page_size
        self.order_by = LegislationOrder.LATEST
        self.max_page = max_page
        self._new_legislation: list[ExternalLegislation] = []

    def run_loop(self, source: ExternalSource) -> LoopStatus:
        log.info("Fetching legislation page %d with page size %d", self.page, self.page_size)
        try:
            response = self._fetch(source)
        except Exception as exc:
            log.error("Error fetching external legislation on page %d: %s", self.page, exc)
            raise

        if not response.items:
            return LoopStatus.FINISHED

        self._new_legislation.extend(response.items)

        if self._is_final(response):
            return LoopStatus.FINISHED

        self.page += 1
        return LoopStatus.NEEDS_ANOTHER_LOOP

    def drain_new_legislation(self) -> Iterator[ExternalLegislation]:
        drained, self._new_legislation = self._new_legislation, []
        return iter(drained)

    @property
    def new_legislation(self) -> tuple[ExternalLegislation, ...]:
        return tuple(self._new_legislation)

    def _fetch(self, source: ExternalSource) -> Paginated[ExternalLegislation]:
        try:
            return source.fetch_legislation(self._query())
        except UnsupportedOrderingError:
            if self.order_by is not LegislationOrder.LATEST:
                raise
        log.info("Source cannot order by latest, falling back to earliest")
        self.order_by = LegislationOrder.EARLIEST
        return source.fetch_legislation(self._query())

    def _query(self) -> LegislationQuery:
        return LegislationQuery(
            session_external_id=self.session_external_id,
            order_by=self.order_by,
            page=self.page,
            page_size=self.page_size,
        )

    def _is_final(self, response: Paginated[ExternalLegislation]) -> bool:
        if response.page >= max(response.num_pages - 1, 0):
            return True
        return self.max_page is not None and response.page >= self.max_page


__all__ = ["DEFAULT_PAGE_SIZE", "LegislationReconciler", "needs_update"]
