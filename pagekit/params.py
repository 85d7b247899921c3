"""Pagination parameters: page, size, sorting, filters, search and cursor."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pagekit.cursor import Cursor
from pagekit.filters import Filter
from pagekit.search import SearchParams

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 20
MAX_PER_PAGE = 100


class SortDirection(str, Enum):
    """Sort order."""

    ASC = "asc"
    DESC = "desc"


@dataclass
class PaginationParams:
    """Everything needed to fetch one page of results."""

    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE
    sort_by: Optional[str] = None
    sort_direction: Optional[SortDirection] = None
    filters: list = dataclasses.field(default_factory=list)
    search: Optional[SearchParams] = None
    disable_total_count: bool = False
    cursor: Optional[Cursor] = None

    def __post_init__(self):
        if self.sort_direction is not None:
            self.sort_direction = SortDirection(self.sort_direction)

    @classmethod
    def clamped(cls, page, per_page):
        """Build parameters with page >= 1 and per_page within 1..100."""
        return cls(page=max(page, 1), per_page=min(max(per_page, 1), MAX_PER_PAGE))

    def with_sort(self, field):
        """Return a copy sorted by ``field``."""
        return dataclasses.replace(self, sort_by=field)

    def with_direction(self, direction):
        """Return a copy with the given sort direction."""
        return dataclasses.replace(self, sort_direction=SortDirection(direction))

    def with_filter(self, filter):
        """Return a copy with one more filter."""
        return dataclasses.replace(self, filters=[*self.filters, filter])

    def with_filters(self, filters):
        """Return a copy with the given filters appended."""
        return dataclasses.replace(self, filters=[*self.filters, *filters])

    def with_search(self, search):
        """Return a copy with the given search."""
        return dataclasses.replace(self, search=search)

    def offset(self):
        """Number of rows to skip before this page."""
        return (self.page - 1) * self.per_page

    def limit(self):
        """Number of rows in a page."""
        return self.per_page

    def to_sql_where(self):
        """Join filters and search into an SQL condition, or None if there are none."""
        conditions = [f.to_sql_where() for f in self.filters]
        if self.search is not None:
            conditions.append(self.search.to_sql_where())
        return " AND ".join(conditions) if conditions else None

    def to_surrealql_where(self):
        """Join filters and search into a SurrealQL condition, or None."""
        conditions = [f.to_surrealql_where() for f in self.filters]
        if self.search is not None:
            escaped = self.search.query.replace("'", "''")
            pattern = f"'{escaped}'" if self.search.exact_match else f"'%{escaped}%'"
            matches = [f"{field} ~ {pattern}" for field in self.search.fields]
            conditions.append("(" + " OR ".join(matches) + ")")
        return " AND ".join(conditions) if conditions else None


__all__ = [
    "Filter",
    "PaginationParams",
    "SearchParams",
    "SortDirection",
]