"""Filter conditions and their rendering as SQL and SurrealQL."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any


class FilterOperator(str, Enum):
    """Comparison operators a filter can apply."""

    EQ = "eq"
    NE = "ne"
    GT = "gt"
    LT = "lt"
    GTE = "gte"
    LTE = "lte"
    LIKE = "like"
    ILIKE = "ilike"
    IN = "in"
    NOT_IN = "notin"
    IS_NULL = "isnull"
    IS_NOT_NULL = "isnotnull"
    BETWEEN = "between"
    CONTAINS = "contains"


def _format_float(number):
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    if number.is_integer():
        text = str(int(number))
        if number == 0 and math.copysign(1.0, number) < 0:
            return "-0"
        return text
    return format(Decimal(repr(number)), "f")


def sql_literal(value):
    """Render a filter value as an inline SQL literal."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, str):
        return "'" + value.replace("'", "''") + "'"
    if isinstance(value, (list, tuple)):
        return "(" + ", ".join(sql_literal(item) for item in value) + ")"
    raise TypeError(f"unsupported filter value: {value!r}")


_SQL_COMPARISONS = {
    FilterOperator.EQ: "=",
    FilterOperator.NE: "!=",
    FilterOperator.GT: ">",
    FilterOperator.LT: "<",
    FilterOperator.GTE: ">=",
    FilterOperator.LTE: "<=",
    FilterOperator.LIKE: "LIKE",
    FilterOperator.ILIKE: "ILIKE",
    FilterOperator.IN: "IN",
    FilterOperator.NOT_IN: "NOT IN",
    FilterOperator.CONTAINS: "@>",
}

_SURREAL_COMPARISONS = {
    FilterOperator.EQ: "=",
    FilterOperator.NE: "!=",
    FilterOperator.GT: ">",
    FilterOperator.LT: "<",
    FilterOperator.GTE: ">=",
    FilterOperator.LTE: "<=",
    FilterOperator.LIKE: "~",
    FilterOperator.ILIKE: "~",
    FilterOperator.IN: "INSIDE",
    FilterOperator.NOT_IN: "NOT INSIDE",
    FilterOperator.CONTAINS: "CONTAINS",
}


@dataclass
class Filter:
    """A single condition on one field."""

    field: str
    operator: FilterOperator
    value: Any = None

    def __post_init__(self):
        self.operator = FilterOperator(self.operator)

    def _between_bounds(self):
        if isinstance(self.value, (list, tuple)) and len(self.value) == 2:
            return self.value[0], self.value[1]
        return None

    def _null_check(self):
        if self.operator is FilterOperator.IS_NULL:
            return f"{self.field} IS NULL"
        if self.operator is FilterOperator.IS_NOT_NULL:
            return f"{self.field} IS NOT NULL"
        return None

    def to_sql_where(self):
        """Render the filter as an SQL condition with inline literals."""
        null_check = self._null_check()
        if null_check is not None:
            return null_check
        if self.operator is FilterOperator.BETWEEN:
            bounds = self._between_bounds()
            if bounds is not None:
                low, high = bounds
                return f"{self.field} BETWEEN {sql_literal(low)} AND {sql_literal(high)}"
            return f"{self.field} = {sql_literal(self.value)}"
        symbol = _SQL_COMPARISONS[self.operator]
        return f"{self.field} {symbol} {sql_literal(self.value)}"

    def to_surrealql_where(self):
        """Render the filter as a SurrealQL condition."""
        null_check = self._null_check()
        if null_check is not None:
            return null_check
        if self.operator is FilterOperator.BETWEEN:
            bounds = self._between_bounds()
            if bounds is not None:
                low, high = bounds
                return (
                    f"{self.field} >= {sql_literal(low)} AND "
                    f"{self.field} <= {sql_literal(high)}"
                )
            return f"{self.field} = {sql_literal(self.value)}"
        symbol = _SURREAL_COMPARISONS[self.operator]
        return f"{self.field} {symbol} {sql_literal(self.value)}"