"""Incremental SQL building with bound parameters for filters and search."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pagekit.errors import PaginatorError
from pagekit.filters import FilterOperator

_COMPARISONS = {
    FilterOperator.EQ: " = ",
    FilterOperator.NE: " != ",
    FilterOperator.GT: " > ",
    FilterOperator.LT: " < ",
    FilterOperator.GTE: " >= ",
    FilterOperator.LTE: " <= ",
    FilterOperator.LIKE: " LIKE ",
    FilterOperator.ILIKE: " ILIKE ",
    FilterOperator.CONTAINS: " @> ",
}

_MEMBERSHIP = {
    FilterOperator.IN: " IN (",
    FilterOperator.NOT_IN: " NOT IN (",
}


class Placeholder(Enum):
    """How bound parameters are written into the SQL text."""

    QMARK = "?"
    DOLLAR = "$"
    FORMAT = "%s"

    def render(self, index):
        """Placeholder text for the ``index``-th (1-based) parameter."""
        if self is Placeholder.DOLLAR:
            return f"${index}"
        return self.value


def _is_scalar(value):
    return isinstance(value, (str, int, float, bool))


class SqlQueryBuilder:
    """Accumulates SQL text and the parameters bound into it.

    Every ``push*`` method returns the builder so calls can be chained.
    """

    def __init__(self, sql="", placeholder=Placeholder.QMARK):
        self.placeholder = Placeholder(placeholder)
        self._parts = [sql] if sql else []
        self._params = []

    def push(self, sql):
        """Append raw SQL text."""
        self._parts.append(sql)
        return self

    def push_bind(self, value):
        """Append a placeholder and bind ``value`` to it."""
        self._params.append(value)
        self._parts.append(self.placeholder.render(len(self._params)))
        return self

    def _bind_value(self, value):
        if value is None:
            self.push("NULL")
        elif isinstance(value, (list, tuple)):
            return
        else:
            self.push_bind(value)

    def _bind_separated(self, values):
        first = True
        for value in values:
            if not _is_scalar(value):
                continue
            if not first:
                self.push(", ")
            self.push_bind(value)
            first = False

    def push_filter(self, filter):
        """Append one filter condition, binding its values."""
        self.push(filter.field)
        operator = filter.operator
        value = filter.value

        if operator in _COMPARISONS:
            self.push(_COMPARISONS[operator])
            self._bind_value(value)
        elif operator in _MEMBERSHIP:
            if isinstance(value, (list, tuple)):
                self.push(_MEMBERSHIP[operator])
                self._bind_separated(value)
                self.push(")")
        elif operator is FilterOperator.IS_NULL:
            self.push(" IS NULL")
        elif operator is FilterOperator.IS_NOT_NULL:
            self.push(" IS NOT NULL")
        elif operator is FilterOperator.BETWEEN:
            if isinstance(value, (list, tuple)) and len(value) == 2:
                self.push(" BETWEEN ")
                self._bind_value(value[0])
                self.push(" AND ")
                self._bind_value(value[1])
        return self

    def push_filters(self, params):
        """Append every filter of ``params``, each preceded by `` AND ``."""
        for flt in params.filters:
            self.push(" AND ")
            self.push_filter(flt)
        return self

    def push_search(self, params):
        """Append the search of ``params`` as an OR group, if it has fields."""
        search = params.search
        if search is None or not search.fields:
            return self
        pattern = search.query if search.exact_match else f"%{search.query}%"
        self.push(" AND (")
        for index, name in enumerate(search.fields):
            if index:
                self.push(" OR ")
            if search.case_sensitive:
                self.push(name)
                self.push(" LIKE ")
                self.push_bind(pattern)
            else:
                self.push("LOWER(")
                self.push(name)
                self.push(") LIKE LOWER(")
                self.push_bind(pattern)
                self.push(")")
        self.push(")")
        return self

    @property
    def sql(self):
        """The SQL text built so far."""
        return "".join(self._parts)

    @property
    def params(self):
        """The parameters bound so far, in order."""
        return list(self._params)

    def build(self):
        """Return ``(sql, params)`` ready for a DB-API ``execute`` call."""
        return self.sql, self.params


@dataclass
class PaginatedQuery:
    """A raw query paired with pagination parameters."""

    query: str
    params: Any = None
    extra: dict = field(default_factory=dict)

    @property
    def count_query(self):
        """The query wrapped in a row count."""
        return f"SELECT COUNT(*) FROM ({self.query})"

    def fetch(self, connection):
        """Prepare the count query, then fail: a raw query needs a dialect.

        Raises :class:`PaginatorError` naming the count query that could
        not be run without database-specific query building.
        """
        count_sql = self.count_query
        raise PaginatorError(
            "Raw query pagination requires database-specific query building. "
            "Use a dialect-aware paginate_query instead. "
            f"(count query: {count_sql})"
        )