# Overview: Response envelope shapes shared by every list endpoint.

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class PageMeta:
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def from_dict(cls, meta: dict | None, *, item_count: int = 0) -> "PageMeta":
        meta = meta or {}
        total = _as_int(meta.get("total"), item_count)
        limit = _as_int(meta.get("limit"), item_count or 1)
        page = _as_int(meta.get("page"), 1)
        total_pages = meta.get("totalPages")
        if total_pages is None:
            total_pages = math.ceil(total / limit) if limit else 0
        return cls(total=total, page=page, limit=limit, total_pages=_as_int(total_pages, 0))


@dataclass
class PaginatedResult:
    """A page of rows from a {data, meta} envelope."""
    items: list[dict[str, Any]] = field(default_factory=list)
    meta: PageMeta = field(default_factory=lambda: PageMeta(total=0, page=1, limit=1, total_pages=0))

    @classmethod
    def from_payload(cls, payload: Any) -> "PaginatedResult":
        """
        Accepts the paginated envelope or a bare array.

        A bare array (endpoints that do not paginate) becomes a single page
        holding every row.
        """
        if isinstance(payload, list):
            return cls(items=payload, meta=PageMeta.from_dict(None, item_count=len(payload)))
        if isinstance(payload, dict):
            items = payload.get("data") or []
            if not isinstance(items, list):
                items = [items]
            return cls(items=items, meta=PageMeta.from_dict(payload.get("meta"), item_count=len(items)))
        return cls()

    def __iter__(self):
        return iter(self.items)

    def __len__(self):
        return len(self.items)


def unwrap(payload: Any) -> Any:
    """Return payload["data"] for {data, message} wrappers, else the payload itself."""
    if isinstance(payload, dict) and "data" in payload and "meta" not in payload:
        return payload["data"]
    return payload


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default
