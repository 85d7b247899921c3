import math

import pytest

from pagekit.filter_parser import parse_filter
from pagekit.filters import Filter, FilterOperator


@pytest.mark.parametrize(
    "text, operator",
    [
        ("age:eq:18", FilterOperator.EQ),
        ("age:ne:18", FilterOperator.NE),
        ("age:gt:18", FilterOperator.GT),
        ("age:lt:18", FilterOperator.LT),
        ("age:gte:18", FilterOperator.GTE),
        ("age:lte:18", FilterOperator.LTE),
        ("age:contains:18", FilterOperator.CONTAINS),
    ],
)
def test_scalar_operators(text, operator):
    assert parse_filter(text) == Filter("age", operator, 18)


def test_float_value():
    assert parse_filter("price:lte:9.5") == Filter("price", FilterOperator.LTE, 9.5)


def test_bool_value():
    assert parse_filter("active:eq:true").value is True
    assert parse_filter("active:eq:false").value is False


def test_string_pattern():
    result = parse_filter("name:like:%doe%")
    assert result == Filter("name", FilterOperator.LIKE, "%doe%")


def test_ilike():
    assert parse_filter("name:ilike:Jo%").operator is FilterOperator.ILIKE


def test_in_list_mixed_types():
    result = parse_filter("id:in:1, 2,x,true,2.5")
    assert result.operator is FilterOperator.IN
    assert result.value == [1, 2, "x", True, 2.5]
    assert isinstance(result.value[3], bool)


def test_not_in():
    result = parse_filter("status:not_in:a,b")
    assert result == Filter("status", FilterOperator.NOT_IN, ["a", "b"])


def test_between_does_not_parse_bools():
    assert parse_filter("id:between:1,5").value == [1, 5]
    assert parse_filter("x:between:a,true").value == ["a", "true"]


@pytest.mark.parametrize(
    "text, operator",
    [
        ("deleted_at:is_null:anything", FilterOperator.IS_NULL),
        ("deleted_at:is_not_null:", FilterOperator.IS_NOT_NULL),
    ],
)
def test_null_checks(text, operator):
    result = parse_filter(text)
    assert result.operator is operator
    assert result.value is None


@pytest.mark.parametrize("text", ["age", "age:gt", "age:bogus:1", "age:isnull:1"])
def test_malformed_returns_none(text):
    assert parse_filter(text) is None


def test_value_may_contain_colons():
    assert parse_filter("note:eq:a:b").value == "a:b"


def test_scalar_value_is_not_trimmed():
    assert parse_filter("id:eq: 5").value == " 5"


def test_underscores_are_not_numbers():
    assert parse_filter("n:eq:1_000").value == "1_000"


def test_out_of_range_int_becomes_float():
    text = "99999999999999999999"
    value = parse_filter(f"n:eq:{text}").value
    assert isinstance(value, float)
    assert value == float(text)


def test_infinity():
    assert parse_filter("n:eq:inf").value == math.inf