"""Paginated results and their metadata."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar

T = TypeVar("T")

_U32_MAX = 2**32 - 1


def _total_pages(total, per_page):
    if per_page <= 0:
        return 0 if total == 0 else _U32_MAX
    return -(-total // per_page)


def _to_jsonable(item):
    if hasattr(item, "to_dict") and callable(item.to_dict):
        return item.to_dict()
    if dataclasses.is_dataclass(item) and not isinstance(item, type):
        return dataclasses.asdict(item)
    if isinstance(item, Enum):
        return item.value
    return item


@dataclass
class PaginatorResponseMeta:
    """Page position, totals and navigation flags for one page."""

    page: int
    per_page: int
    total: Optional[int] = None
    total_pages: Optional[int] = None
    has_next: bool = False
    has_prev: bool = False
    next_cursor: Optional[str] = None
    prev_cursor: Optional[str] = None

    @classmethod
    def with_total(cls, page, per_page, total):
        """Metadata computed from a known total count."""
        pages = _total_pages(total, per_page)
        return cls(
            page=page,
            per_page=per_page,
            total=total,
            total_pages=pages,
            has_next=page < pages,
            has_prev=page > 1,
        )

    @classmethod
    def without_total(cls, page, per_page, has_next):
        """Metadata when the total count was not computed."""
        return cls(page=page, per_page=per_page, has_next=has_next, has_prev=page > 1)

    @classmethod
    def with_cursors(cls, page, per_page, total, has_next, next_cursor, prev_cursor):
        """Metadata for cursor-based pagination."""
        return cls(
            page=page,
            per_page=per_page,
            total=total,
            total_pages=None if total is None else _total_pages(total, per_page),
            has_next=has_next,
            has_prev=page > 1 or prev_cursor is not None,
            next_cursor=next_cursor,
            prev_cursor=prev_cursor,
        )

    def to_dict(self):
        """JSON-ready dict; optional fields that are unset are left out."""
        result = {"page": self.page, "per_page": self.per_page}
        if self.total is not None:
            result["total"] = self.total
        if self.total_pages is not None:
            result["total_pages"] = self.total_pages
        result["has_next"] = self.has_next
        result["has_prev"] = self.has_prev
        if self.next_cursor is not None:
            result["next_cursor"] = self.next_cursor
        if self.prev_cursor is not None:
            result["prev_cursor"] = self.prev_cursor
        return result


@dataclass
class PaginatorResponse(Generic[T]):
    """One page of items with its metadata."""

    data: List[T]
    meta: PaginatorResponseMeta

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict with ``data`` and ``meta`` keys."""
        return {
            "data": [_to_jsonable(item) for item in self.data],
            "meta": self.meta.to_dict(),
        }