"""Offset and cursor pagination of raw SQL queries over DB-API connections."""

from __future__ import annotations

from enum import Enum

from pagekit.cursor import CursorDirection
from pagekit.errors import PaginatorError
from pagekit.params import SortDirection
from pagekit.response import PaginatorResponse, PaginatorResponseMeta
from pagekit.sql_builder import Placeholder, SqlQueryBuilder


class Dialect(str, Enum):
    """SQL database family, which fixes how parameters are written."""

    SQLITE = "sqlite"
    POSTGRES = "postgres"
    MYSQL = "mysql"

    @property
    def placeholder(self):
        """Parameter style used by the usual DB-API driver for this dialect."""
        if self is Dialect.SQLITE:
            return Placeholder.QMARK
        return Placeholder.FORMAT


def is_cte_query(query):
    """True if ``query`` starts with a ``WITH`` clause."""
    return query.strip().upper().startswith("WITH")


def _filtered_cte_prefix(base_query):
    return (
        f"{base_query.rstrip(';')}, _paginator_filtered AS "
        f"(SELECT * FROM ({base_query}) AS _base WHERE 1=1"
    )


def _count_query_text(base_query, has_filters_or_search):
    if has_filters_or_search:
        if is_cte_query(base_query):
            return _filtered_cte_prefix(base_query)
        return f"SELECT COUNT(*) FROM ({base_query}) AS _base WHERE 1=1"
    return f"SELECT COUNT(*) FROM ({base_query}) as count_subquery"


def _data_query_text(base_query, has_filters_or_search):
    if not has_filters_or_search:
        return base_query
    if is_cte_query(base_query):
        return _filtered_cte_prefix(base_query)
    return f"SELECT * FROM ({base_query}) AS _base WHERE 1=1"


def _cursor_operator(params):
    descending = params.sort_direction is SortDirection.DESC
    if params.cursor.direction is CursorDirection.AFTER:
        return "<" if descending else ">"
    return ">" if descending else "<"


def _run(connection, sql, args, fetch_all):
    cursor = connection.cursor()
    try:
        cursor.execute(sql, tuple(args))
        if not fetch_all:
            return cursor.fetchone()
        columns = [column[0] for column in cursor.description or ()]
        return [dict(zip(columns, row)) for row in cursor.fetchall()]
    finally:
        close = getattr(cursor, "close", None)
        if close is not None:
            close()


def _count(connection, base_query, params, placeholder, has_filters_or_search):
    builder = SqlQueryBuilder(
        _count_query_text(base_query, has_filters_or_search), placeholder
    )
    if has_filters_or_search:
        builder.push_filters(params).push_search(params)
        if is_cte_query(base_query):
            builder.push(") SELECT COUNT(*) FROM _paginator_filtered")
    sql, args = builder.build()
    try:
        row = _run(connection, sql, args, fetch_all=False)
    except Exception as exc:
        raise PaginatorError(f"Count query failed: {exc}") from exc
    if row is None:
        raise PaginatorError("Count query failed: no rows returned")
    return int(row[0])


def _data_builder(base_query, params, placeholder, has_filters_or_search):
    builder = SqlQueryBuilder(
        _data_query_text(base_query, has_filters_or_search), placeholder
    )
    if has_filters_or_search:
        builder.push_filters(params).push_search(params)
        if is_cte_query(base_query):
            builder.push(") SELECT * FROM _paginator_filtered")

    if params.cursor is not None:
        builder.push(" AND " if has_filters_or_search else " WHERE ")
        builder.push(params.cursor.field)
        builder.push(f" {_cursor_operator(params)} ")
        builder.push_bind(params.cursor.value)

    if params.sort_by is not None:
        builder.push(" ORDER BY ")
        builder.push(params.sort_by)
        builder.push(" DESC" if params.sort_direction is SortDirection.DESC else " ASC")

    builder.push(" LIMIT ")
    if params.cursor is not None:
        builder.push_bind(params.limit() + 1)
    else:
        builder.push_bind(params.limit())
        builder.push(" OFFSET ")
        builder.push_bind(params.offset())
    return builder


def paginate_query(connection, base_query, params, dialect=Dialect.SQLITE):
    """Fetch one page of ``base_query`` through a DB-API ``connection``.

    Filters and search are applied by wrapping the query; rows come back as
    dicts keyed by column name. Database failures raise :class:`PaginatorError`.
    """
    placeholder = Dialect(dialect).placeholder
    has_filters_or_search = bool(params.filters) or params.search is not None

    total = None
    if not params.disable_total_count:
        total = _count(connection, base_query, params, placeholder, has_filters_or_search)

    sql, args = _data_builder(
        base_query, params, placeholder, has_filters_or_search
    ).build()
    try:
        data = _run(connection, sql, args, fetch_all=True)
    except Exception as exc:
        raise PaginatorError(f"Paginated query failed: {exc}") from exc

    if params.cursor is not None:
        has_next = len(data) > params.per_page
        if has_next:
            data = data[: params.per_page]
        meta = PaginatorResponseMeta.with_cursors(
            params.page, params.per_page, total, has_next, None, None
        )
    elif total is not None:
        meta = PaginatorResponseMeta.with_total(params.page, params.per_page, total)
    else:
        has_next = len(data) > params.per_page
        meta = PaginatorResponseMeta.without_total(params.page, params.per_page, has_next)

    return PaginatorResponse(data=data, meta=meta)