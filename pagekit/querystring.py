"""Reading pagination parameters from URL query strings."""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qsl

from pagekit.errors import PaginatorError
from pagekit.filter_parser import parse_filter
from pagekit.params import (
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    MAX_PER_PAGE,
    PaginationParams,
    SortDirection,
)
from pagekit.search import SearchParams

_U32_RE = re.compile(r"\+?[0-9]+")
_U32_MAX = 2**32 - 1
_INT_KEYS = ("page", "per_page")
_STR_KEYS = ("sort_by", "sort_direction", "search", "search_fields")


class InvalidQueryError(PaginatorError, ValueError):
    """Raised when a query string cannot be read as pagination parameters."""

    status_code = 400

    def __init__(self, detail):
        self.detail = detail
        super().__init__(f"Invalid query params: {detail}")


def _parse_u32(text):
    if not _U32_RE.fullmatch(text):
        return None
    number = int(text)
    return number if number <= _U32_MAX else None


def _parse_direction(text):
    if text is None:
        return None
    lowered = text.lower()
    if lowered == "asc":
        return SortDirection.ASC
    if lowered == "desc":
        return SortDirection.DESC
    return None


def _clamp_per_page(per_page):
    return min(max(per_page, 1), MAX_PER_PAGE)


def _pairs(query):
    if isinstance(query, str):
        return parse_qsl(query.removeprefix("?"), keep_blank_values=True)
    if isinstance(query, Mapping):
        pairs = []
        for key, value in query.items():
            if isinstance(value, (list, tuple)):
                pairs.extend((key, item) for item in value)
            else:
                pairs.append((key, value))
        return pairs
    return list(query)


@dataclass
class PaginationQuery:
    """Raw pagination fields as they arrive in a query string."""

    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE
    sort_by: Optional[str] = None
    sort_direction: Optional[str] = None
    filter: list = dataclasses.field(default_factory=list)
    search: Optional[str] = None
    search_fields: Optional[str] = None

    def to_params(self):
        """Normalise into :class:`PaginationParams`, clamping page and page size.

        Unknown sort directions and malformed filters are dropped; a search
        without fields is ignored.
        """
        filters = [f for f in map(parse_filter, self.filter) if f is not None]
        search = None
        if self.search is not None and self.search_fields is not None:
            fields = [name.strip() for name in self.search_fields.split(",")]
            if fields:
                search = SearchParams(self.search, fields)
        return PaginationParams(
            page=max(self.page, 1),
            per_page=_clamp_per_page(self.per_page),
            sort_by=self.sort_by,
            sort_direction=_parse_direction(self.sort_direction),
            filters=filters,
            search=search,
        )


def _query_from_pairs(pairs):
    values = {}
    filters = []
    for key, value in pairs:
        if key == "filter":
            filters.append(value)
            continue
        if key not in _INT_KEYS and key not in _STR_KEYS:
            continue
        if key in values:
            raise InvalidQueryError(f"duplicate field `{key}`")
        if key in _INT_KEYS:
            number = _parse_u32(value)
            if number is None:
                raise InvalidQueryError(f"invalid value for `{key}`: {value!r}")
            values[key] = number
        else:
            values[key] = value
    return PaginationQuery(filter=filters, **values)


def parse_pagination_query(query):
    """Read full pagination parameters (filters and search included) from a query.

    ``query`` is a query string, a mapping or an iterable of key/value pairs.
    Raises :class:`InvalidQueryError` when page or per_page is not a valid
    unsigned integer or a field is repeated.
    """
    return _query_from_pairs(_pairs(query)).to_params()


def parse_simple_query(query):
    """Read page, size and sorting leniently; unparseable numbers are ignored."""
    page = DEFAULT_PAGE
    per_page = DEFAULT_PER_PAGE
    sort_by = None
    sort_direction = None
    for key, value in _pairs(query):
        if key == "page":
            number = _parse_u32(value)
            if number is not None:
                page = max(number, 1)
        elif key == "per_page":
            number = _parse_u32(value)
            if number is not None:
                per_page = _clamp_per_page(number)
        elif key == "sort_by":
            sort_by = value
        elif key == "sort_direction":
            sort_direction = _parse_direction(value)
    return PaginationParams(
        page=page, per_page=per_page, sort_by=sort_by, sort_direction=sort_direction
    )