import pytest

from pagekit.builder import PaginatorBuilder
from pagekit.cursor import Cursor, CursorDirection
from pagekit.filters import Filter, FilterOperator
from pagekit.params import SortDirection
from pagekit.search import SearchParams


def test_defaults_match_plain_params():
    params = PaginatorBuilder().build()
    assert params.page == 1
    assert params.per_page == 20
    assert params.filters == []
    assert params.search is None
    assert params.cursor is None
    assert params.disable_total_count is False


def test_page_is_raised_to_one():
    assert PaginatorBuilder().page(0).build().page == 1
    assert PaginatorBuilder().page(7).build().page == 7


def test_per_page_is_clamped():
    assert PaginatorBuilder().per_page(0).build().per_page == 1
    assert PaginatorBuilder().per_page(500).build().per_page == 100
    assert PaginatorBuilder().per_page(35).build().per_page == 35


def test_sorting():
    params = PaginatorBuilder().sort_by("name").sort_desc().build()
    assert params.sort_by == "name"
    assert params.sort_direction is SortDirection.DESC
    params = PaginatorBuilder().sort_by("id").sort_asc().build()
    assert params.sort_direction is SortDirection.ASC


@pytest.mark.parametrize(
    "method, operator",
    [
        ("filter_eq", FilterOperator.EQ),
        ("filter_ne", FilterOperator.NE),
        ("filter_gt", FilterOperator.GT),
        ("filter_lt", FilterOperator.LT),
        ("filter_gte", FilterOperator.GTE),
        ("filter_lte", FilterOperator.LTE),
    ],
)
def test_comparison_filters(method, operator):
    builder = PaginatorBuilder()
    params = getattr(builder, method)("age", 18).build()
    assert params.filters == [Filter("age", operator, 18)]


def test_pattern_and_set_filters():
    params = (
        PaginatorBuilder()
        .filter_like("name", "%Doe%")
        .filter_ilike("email", "%EXAMPLE%")
        .filter_in("id", [1, 3, 5])
        .filter_between("id", 3, 6)
        .filter_is_null("deleted_at")
        .filter_is_not_null("created_at")
        .build()
    )
    assert params.filters == [
        Filter("name", FilterOperator.LIKE, "%Doe%"),
        Filter("email", FilterOperator.ILIKE, "%EXAMPLE%"),
        Filter("id", FilterOperator.IN, [1, 3, 5]),
        Filter("id", FilterOperator.BETWEEN, [3, 6]),
        Filter("deleted_at", FilterOperator.IS_NULL, None),
        Filter("created_at", FilterOperator.IS_NOT_NULL, None),
    ]


def test_generic_filter_accepts_operator_name():
    params = PaginatorBuilder().filter("status", "eq", "active").build()
    assert params.filters == [Filter("status", FilterOperator.EQ, "active")]


def test_search_variants():
    fields = ["name", "email"]
    assert PaginatorBuilder().search("john", fields).build().search == SearchParams(
        "john", fields
    )
    assert PaginatorBuilder().search_exact("john", fields).build().search == (
        SearchParams("john", fields, exact_match=True)
    )
    assert PaginatorBuilder().search_case_sensitive(
        "john", fields
    ).build().search == SearchParams("john", fields, case_sensitive=True)


def test_later_search_replaces_earlier():
    params = PaginatorBuilder().search("a", ["name"]).search("b", ["email"]).build()
    assert params.search == SearchParams("b", ["email"])


def test_disable_total_count():
    assert PaginatorBuilder().disable_total_count().build().disable_total_count is True


def test_cursor_methods():
    after = PaginatorBuilder().cursor_after("id", 10).build().cursor
    before = PaginatorBuilder().cursor_before("id", 10).build().cursor
    generic = PaginatorBuilder().cursor("ts", 1.5, "before").build().cursor
    assert after == Cursor("id", 10, CursorDirection.AFTER)
    assert before == Cursor("id", 10, CursorDirection.BEFORE)
    assert generic == Cursor("ts", 1.5, CursorDirection.BEFORE)


def test_cursor_from_encoded_round_trip():
    cursor = Cursor("id", "abc123", CursorDirection.AFTER)
    params = PaginatorBuilder().cursor_from_encoded(cursor.encode()).build()
    assert params.cursor == cursor


def test_cursor_from_encoded_rejects_garbage():
    with pytest.raises(ValueError):
        PaginatorBuilder().cursor_from_encoded("not base64!!")


def test_built_params_are_independent_of_builder():
    builder = PaginatorBuilder().filter_eq("id", 1)
    first = builder.build()
    builder.filter_eq("id", 2)
    assert len(first.filters) == 1
    assert len(builder.build().filters) == 2


def test_where_clause_from_builder():
    params = (
        PaginatorBuilder()
        .filter_eq("status", "active")
        .filter_gt("age", 18)
        .search("john", ["name", "email"])
        .build()
    )
    assert params.to_sql_where() == (
        "status = 'active' AND age > 18 AND "
        "(name ILIKE '%john%' OR email ILIKE '%john%')"
    )