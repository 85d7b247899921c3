"""An in-memory user collection with filtering, search, sorting and paging."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from pagekit.errors import InvalidPageError
from pagekit.filters import FilterOperator
from pagekit.paginator import Paginator
from pagekit.params import SortDirection
from pagekit.response import PaginatorResponse, PaginatorResponseMeta

_SORT_KEYS = {
    "id": lambda user: user.id,
    "name": lambda user: user.name,
    "email": lambda user: user.email,
}

_ORDERINGS = {
    FilterOperator.GT: lambda a, b: a > b,
    FilterOperator.LT: lambda a, b: a < b,
    FilterOperator.GTE: lambda a, b: a >= b,
    FilterOperator.LTE: lambda a, b: a <= b,
}


@dataclass
class User:
    """A user record."""

    id: int
    name: str
    email: str


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _same(a, b):
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(_same(x, y) for x, y in zip(a, b))
    return type(a) is type(b) and a == b


def _field_value(user, field):
    if field == "id":
        return user.id
    if field in ("name", "email"):
        return getattr(user, field)
    return None


def _matches_filter(user, flt):
    if flt.field not in ("id", "name", "email"):
        return True
    field_value = _field_value(user, flt.field)
    operator, value = flt.operator, flt.value

    if operator is FilterOperator.EQ:
        return _same(field_value, value)
    if operator is FilterOperator.NE:
        return not _same(field_value, value)
    if operator in _ORDERINGS and _is_int(value):
        return _is_int(field_value) and _ORDERINGS[operator](field_value, value)
    if operator in (FilterOperator.LIKE, FilterOperator.ILIKE) and isinstance(value, str):
        if not isinstance(field_value, str):
            return False
        needle = value.replace("%", "").lower()
        return needle in field_value.lower()
    if operator is FilterOperator.IN and isinstance(value, list):
        return any(_same(field_value, item) for item in value)
    if operator is FilterOperator.NOT_IN and isinstance(value, list):
        return not any(_same(field_value, item) for item in value)
    if operator is FilterOperator.BETWEEN and isinstance(value, list):
        if len(value) != 2:
            return False
        low, high = value
        if not (_is_int(low) and _is_int(high) and _is_int(field_value)):
            return False
        return low <= field_value <= high
    return True


def _matches_search(user, search):
    query = search.query if search.case_sensitive else search.query.lower()
    for field in search.fields:
        if field not in ("name", "email"):
            continue
        candidate = getattr(user, field)
        if not search.case_sensitive:
            candidate = candidate.lower()
        if (candidate == query) if search.exact_match else (query in candidate):
            return True
    return False


@dataclass
class UserRepository(Paginator):
    """Users held in memory, paginated according to :class:`PaginationParams`."""

    users: list = dataclasses.field(default_factory=list)

    def paginate(self, params):
        """Filter, search, sort and slice the users into one page."""
        if params.page < 1:
            raise InvalidPageError(params.page)

        data = [
            user
            for user in self.users
            if all(_matches_filter(user, flt) for flt in params.filters)
        ]
        if params.search is not None:
            data = [user for user in data if _matches_search(user, params.search)]

        total = len(data)

        key = _SORT_KEYS.get(params.sort_by) if params.sort_by is not None else None
        if key is not None:
            descending = params.sort_direction is SortDirection.DESC
            data.sort(key=key, reverse=descending)

        offset = params.offset()
        page_items = data[offset : offset + params.limit()]

        return PaginatorResponse(
            data=page_items,
            meta=PaginatorResponseMeta.with_total(params.page, params.per_page, total),
        )