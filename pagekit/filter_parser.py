"""Parsing of ``field:operator:value`` filter expressions from query strings."""

from __future__ import annotations

import re

from pagekit.filters import Filter, FilterOperator

_OPERATORS = {
    "eq": FilterOperator.EQ,
    "ne": FilterOperator.NE,
    "gt": FilterOperator.GT,
    "lt": FilterOperator.LT,
    "gte": FilterOperator.GTE,
    "lte": FilterOperator.LTE,
    "like": FilterOperator.LIKE,
    "ilike": FilterOperator.ILIKE,
    "in": FilterOperator.IN,
    "not_in": FilterOperator.NOT_IN,
    "is_null": FilterOperator.IS_NULL,
    "is_not_null": FilterOperator.IS_NOT_NULL,
    "between": FilterOperator.BETWEEN,
    "contains": FilterOperator.CONTAINS,
}

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_SPECIAL_FLOAT_RE = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def _parse_int(text):
    if not _INT_RE.fullmatch(text):
        return None
    number = int(text)
    if not _I64_MIN <= number <= _I64_MAX:
        return None
    return number


def _parse_float(text):
    if _FLOAT_RE.fullmatch(text) or _SPECIAL_FLOAT_RE.fullmatch(text):
        return float(text)
    return None


def _scalar(text, allow_bool=True):
    number = _parse_int(text)
    if number is not None:
        return number
    real = _parse_float(text)
    if real is not None:
        return real
    if allow_bool and text in ("true", "false"):
        return text == "true"
    return text


def parse_filter(filter_str):
    """Parse ``field:operator:value`` into a :class:`Filter`, or None if malformed.

    Values become int, float, bool or str; ``in``/``not_in``/``between`` take
    comma-separated lists and the null checks ignore their value.
    """
    parts = filter_str.split(":", 2)
    if len(parts) < 3:
        return None
    field, op_name, value_str = parts
    operator = _OPERATORS.get(op_name)
    if operator is None:
        return None

    if operator in (FilterOperator.IS_NULL, FilterOperator.IS_NOT_NULL):
        value = None
    elif operator in (FilterOperator.IN, FilterOperator.NOT_IN):
        value = [_scalar(item.strip()) for item in value_str.split(",")]
    elif operator is FilterOperator.BETWEEN:
        value = [_scalar(item.strip(), allow_bool=False) for item in value_str.split(",")]
    else:
        value = _scalar(value_str)

    return Filter(field, operator, value)