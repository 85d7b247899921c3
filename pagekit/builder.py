"""Fluent construction of pagination parameters."""

from __future__ import annotations

import dataclasses

from pagekit.cursor import Cursor, CursorDirection
from pagekit.filters import Filter, FilterOperator
from pagekit.params import MAX_PER_PAGE, PaginationParams, SortDirection
from pagekit.search import SearchParams


class PaginatorBuilder:
    """Chainable builder for :class:`PaginationParams`.

    Every method updates the builder and returns it, so calls can be chained.
    """

    def __init__(self):
        self._params = PaginationParams()

    def page(self, page):
        """Set the page number, raising values below 1 to 1."""
        self._params.page = max(page, 1)
        return self

    def per_page(self, per_page):
        """Set the page size, clamped to 1..100."""
        self._params.per_page = min(max(per_page, 1), MAX_PER_PAGE)
        return self

    def sort_by(self, field):
        """Sort by ``field``."""
        self._params.sort_by = field
        return self

    def sort_asc(self):
        """Sort in ascending order."""
        self._params.sort_direction = SortDirection.ASC
        return self

    def sort_desc(self):
        """Sort in descending order."""
        self._params.sort_direction = SortDirection.DESC
        return self

    def filter(self, field, operator, value):
        """Add a filter with any operator."""
        self._params.filters.append(Filter(field, operator, value))
        return self

    def filter_eq(self, field, value):
        """Add ``field = value``."""
        return self.filter(field, FilterOperator.EQ, value)

    def filter_ne(self, field, value):
        """Add ``field != value``."""
        return self.filter(field, FilterOperator.NE, value)

    def filter_gt(self, field, value):
        """Add ``field > value``."""
        return self.filter(field, FilterOperator.GT, value)

    def filter_lt(self, field, value):
        """Add ``field < value``."""
        return self.filter(field, FilterOperator.LT, value)

    def filter_gte(self, field, value):
        """Add ``field >= value``."""
        return self.filter(field, FilterOperator.GTE, value)

    def filter_lte(self, field, value):
        """Add ``field <= value``."""
        return self.filter(field, FilterOperator.LTE, value)

    def filter_like(self, field, pattern):
        """Add a case-sensitive LIKE pattern match."""
        return self.filter(field, FilterOperator.LIKE, str(pattern))

    def filter_ilike(self, field, pattern):
        """Add a case-insensitive LIKE pattern match."""
        return self.filter(field, FilterOperator.ILIKE, str(pattern))

    def filter_in(self, field, values):
        """Add a membership test against ``values``."""
        return self.filter(field, FilterOperator.IN, list(values))

    def filter_between(self, field, min_value, max_value):
        """Add an inclusive range test."""
        return self.filter(field, FilterOperator.BETWEEN, [min_value, max_value])

    def filter_is_null(self, field):
        """Add ``field IS NULL``."""
        return self.filter(field, FilterOperator.IS_NULL, None)

    def filter_is_not_null(self, field):
        """Add ``field IS NOT NULL``."""
        return self.filter(field, FilterOperator.IS_NOT_NULL, None)

    def search(self, query, fields):
        """Search for ``query`` in ``fields``, partial and case-insensitive."""
        self._params.search = SearchParams(query, list(fields))
        return self

    def search_exact(self, query, fields):
        """Search for an exact match of ``query`` in ``fields``."""
        self._params.search = SearchParams(query, list(fields)).with_exact_match(True)
        return self

    def search_case_sensitive(self, query, fields):
        """Search for ``query`` in ``fields``, respecting case."""
        self._params.search = SearchParams(query, list(fields)).with_case_sensitive(
            True
        )
        return self

    def disable_total_count(self):
        """Skip computing the total number of rows."""
        self._params.disable_total_count = True
        return self

    def cursor(self, field, value, direction):
        """Paginate from a cursor on ``field``."""
        self._params.cursor = Cursor(field, value, CursorDirection(direction))
        return self

    def cursor_after(self, field, value):
        """Fetch rows after ``value`` of ``field``."""
        return self.cursor(field, value, CursorDirection.AFTER)

    def cursor_before(self, field, value):
        """Fetch rows before ``value`` of ``field``."""
        return self.cursor(field, value, CursorDirection.BEFORE)

    def cursor_from_encoded(self, encoded):
        """Use an encoded cursor; raise ValueError if it cannot be decoded."""
        self._params.cursor = Cursor.decode(encoded)
        return self

    def build(self):
        """Return the finished parameters."""
        return dataclasses.replace(self._params, filters=list(self._params.filters))