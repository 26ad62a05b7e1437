# Overview: Page arithmetic for list views.

from __future__ import annotations

import math

from .models.common import PageMeta


class Pagination:
    """
    Page state for a list of total_items rows shown items_per_page at a time.

    Pages are 1-indexed. go_to_page clamps into [1, total_pages]; with no
    rows at all the current page stays at 1.
    """

    def __init__(self, total_items: int, items_per_page: int, current_page: int = 1):
        if items_per_page < 1:
            raise ValueError("items_per_page must be at least 1")
        self.total_items = max(0, int(total_items))
        self.items_per_page = int(items_per_page)
        self.current_page = 1
        self._total_pages_override = None
        self.go_to_page(current_page)

    @classmethod
    def from_meta(cls, meta: PageMeta) -> "Pagination":
        pagination = cls(meta.total, max(meta.limit, 1))
        if meta.total_pages and pagination.total_pages != meta.total_pages:
            # trust the server's page count when it disagrees with our arithmetic
            pagination._total_pages_override = meta.total_pages
        pagination.go_to_page(meta.page)
        return pagination

    @property
    def total_pages(self) -> int:
        if self._total_pages_override is not None:
            return self._total_pages_override
        return math.ceil(self.total_items / self.items_per_page)

    @property
    def start_index(self) -> int:
        return (self.current_page - 1) * self.items_per_page

    @property
    def end_index(self) -> int:
        return min(self.start_index + self.items_per_page, self.total_items)

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    def go_to_page(self, page: int) -> int:
        self.current_page = max(1, min(int(page), self.total_pages))
        return self.current_page

    def next_page(self) -> int:
        if self.has_next:
            self.current_page += 1
        return self.current_page

    def previous_page(self) -> int:
        if self.has_previous:
            self.current_page -= 1
        return self.current_page

    def iter_pages(self, window: int = 2):
        """
        Page numbers for the pager strip, with None marking a gap.

        Always includes the first and last page plus `window` pages either
        side of the current one.
        """
        last = self.total_pages
        if last <= 0:
            return
        previous = 0
        for number in range(1, last + 1):
            near_current = abs(number - self.current_page) <= window
            if number in (1, last) or near_current:
                if previous and number - previous > 1:
                    yield None
                yield number
                previous = number


def parse_page_args(args, default_limit: int) -> tuple[int, int]:
    """Read ?page= and ?limit= leniently; bad or non-positive values fall back to defaults."""
    page = args.get("page", type=int) or 1
    limit = args.get("limit", type=int) or default_limit
    if page < 1:
        page = 1
    if limit < 1:
        limit = default_limit
    return page, limit
