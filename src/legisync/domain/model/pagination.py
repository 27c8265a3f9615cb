"""Page container shared by both collaborators (pages are 0-indexed)."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(kw_only=True)
class Paginated[T]:
    items: list[T] = field(default_factory=list["T"])
    page: int = 0
    page_size: int = 0
    num_items: int = 0
    num_pages: int = 0

    @property
    def is_last_page(self) -> bool:
        return self.page >= max(self.num_pages - 1, 0)
