import pytest
from sqlalchemy import Column, Integer, MetaData, String, Table, column, create_engine, select, table

from pagekit.builder import PaginatorBuilder
from pagekit.errors import PaginatorError
from pagekit.orm import build_filter_condition, paginate, paginate_with_sort
from pagekit.params import PaginationParams, SortDirection

ROWS = [
    {"id": 1, "name": "Alice", "email": "alice@example.com", "age": 30},
    {"id": 2, "name": "Bob", "email": "bob@example.com", "age": 17},
    {"id": 3, "name": "Carol", "email": "carol@example.com", "age": None},
    {"id": 4, "name": "Dave", "email": "dave@example.com", "age": 45},
    {"id": 5, "name": "Eve", "email": "eve@example.com", "age": 22},
]


@pytest.fixture
def db():
    metadata = MetaData()
    users = Table(
        "users",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("name", String),
        Column("email", String),
        Column("age", Integer, nullable=True),
    )
    engine = create_engine("sqlite://")
    metadata.create_all(engine)
    with engine.begin() as conn:
        conn.execute(users.insert(), ROWS)
    with engine.connect() as conn:
        yield conn, users


def _by_id(q, field, direction):
    col = column(field)
    return q.order_by(col.desc() if direction is SortDirection.DESC else col.asc())


def _ids(response):
    return [row["id"] for row in response.data]


def _run(db, params):
    conn, users = db
    return paginate_with_sort(select(users), conn, params, _by_id)


def test_plain_pagination(db):
    params = PaginatorBuilder().page(1).per_page(2).sort_by("id").sort_asc().build()
    response = _run(db, params)
    assert _ids(response) == [1, 2]
    assert response.meta.total == len(ROWS)
    assert response.meta.has_next is True
    assert response.meta.has_prev is False


def test_second_page_offsets(db):
    params = PaginatorBuilder().page(2).per_page(2).sort_by("id").sort_asc().build()
    assert _ids(_run(db, params)) == [3, 4]


def test_rows_are_dicts(db):
    params = PaginatorBuilder().filter_eq("id", 4).build()
    response = _run(db, params)
    assert response.data == [ROWS[3]]


@pytest.mark.parametrize(
    "configure, expected",
    [
        (lambda b: b.filter_gt("age", 18), [1, 4, 5]),
        (lambda b: b.filter_lte("age", 22), [2, 5]),
        (lambda b: b.filter_ne("id", 1), [2, 3, 4, 5]),
        (lambda b: b.filter_is_null("age"), [3]),
        (lambda b: b.filter_is_not_null("age"), [1, 2, 4, 5]),
        (lambda b: b.filter_in("id", [2, 4]), [2, 4]),
        (lambda b: b.filter_between("age", 20, 40), [1, 5]),
        (lambda b: b.filter_ilike("name", "%AL%"), [1]),
        (lambda b: b.filter("name", "contains", "ve"), [4, 5]),
        (lambda b: b.filter("id", "notin", [1, 2]), [3, 4, 5]),
        (lambda b: b.search("BOB", ["name", "email"]), [2]),
        (lambda b: b.search_exact("Dave", ["name"]), [4]),
    ],
)
def test_filters_and_search(db, configure, expected):
    params = configure(PaginatorBuilder().sort_by("id").sort_asc()).build()
    response = _run(db, params)
    assert _ids(response) == expected
    assert response.meta.total == len(expected)


def test_mismatched_filter_is_skipped(db):
    params = PaginatorBuilder().filter("id", "between", [1]).build()
    assert _run(db, params).meta.total == len(ROWS)


def test_cursor_after_ascending(db):
    params = (
        PaginatorBuilder().per_page(2).sort_by("id").sort_asc().cursor_after("id", 2).build()
    )
    response = _run(db, params)
    assert _ids(response) == [3, 4]
    assert response.meta.has_next is True
    assert response.meta.has_prev is False
    assert response.meta.total == 3


def test_cursor_before_descending_flips_comparison(db):
    params = PaginatorBuilder().sort_by("id").sort_desc().cursor_before("id", 4).build()
    response = _run(db, params)
    assert _ids(response) == [5]
    assert response.meta.has_next is False


def test_disable_total_count(db):
    params = PaginatorBuilder().per_page(2).disable_total_count().build()
    response = _run(db, params)
    assert len(response.data) == 2
    assert response.meta.total is None
    assert response.meta.total_pages is None
    assert response.meta.has_next is False


def test_sort_fn_not_called_without_direction(db):
    conn, users = db

    def refuse(*_):
        raise AssertionError("sort_fn should not be called")

    params = PaginationParams(sort_by="id")
    response = paginate_with_sort(select(users), conn, params, refuse)
    assert response.meta.total == len(ROWS)


def test_paginate_without_sort(db):
    conn, users = db
    response = paginate(select(users), conn, PaginationParams(per_page=10))
    assert sorted(_ids(response)) == [row["id"] for row in ROWS]


def test_count_failure_is_wrapped(db):
    conn, _ = db
    missing = table("missing", column("id"))
    with pytest.raises(PaginatorError, match="Count query failed"):
        paginate(select(missing), conn, PaginationParams())


def test_data_failure_is_wrapped(db):
    conn, _ = db
    missing = table("missing", column("id"))
    params = PaginatorBuilder().disable_total_count().build()
    with pytest.raises(PaginatorError, match="Paginated query failed"):
        paginate(select(missing), conn, params)


def test_condition_renders_filter():
    params = PaginatorBuilder().filter_eq("id", 3).build()
    condition = build_filter_condition(params)
    rendered = str(condition.compile(compile_kwargs={"literal_binds": True}))
    assert rendered == "id = 3"


def test_empty_condition_matches_everything(db):
    conn, users = db
    condition = build_filter_condition(PaginationParams())
    rows = conn.execute(select(users).where(condition)).all()
    assert len(rows) == len(ROWS)