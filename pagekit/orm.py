"""Pagination of SQLAlchemy ``Select`` statements."""

from __future__ import annotations

import operator as _op

from sqlalchemy import and_, column, func, literal_column, null, or_, select as sa_select, true
from sqlalchemy.exc import SQLAlchemyError

from pagekit.cursor import CursorDirection
from pagekit.errors import PaginatorError
from pagekit.filters import FilterOperator
from pagekit.params import SortDirection
from pagekit.response import PaginatorResponse, PaginatorResponseMeta

_COMPARISONS = {
    FilterOperator.EQ: ("=", _op.eq),
    FilterOperator.NE: ("!=", _op.ne),
    FilterOperator.GT: (">", _op.gt),
    FilterOperator.LT: ("<", _op.lt),
    FilterOperator.GTE: (">=", _op.ge),
    FilterOperator.LTE: ("<=", _op.le),
}


def _bind_value(value):
    if isinstance(value, (list, tuple)):
        return None
    return value


def _compare(col, op_key, value):
    symbol, func_op = _COMPARISONS[op_key]
    value = _bind_value(value)
    if value is None:
        return col.op(symbol)(null())
    return func_op(col, value)


def _lowered(field):
    return literal_column(f"LOWER({field})")


def _cursor_condition(params):
    cursor = params.cursor
    col = column(cursor.field)
    descending = params.sort_direction is SortDirection.DESC
    if cursor.direction is CursorDirection.AFTER:
        return col < cursor.value if descending else col > cursor.value
    return col > cursor.value if descending else col < cursor.value


def _filter_condition(flt):
    col = column(flt.field)
    operator, value = flt.operator, flt.value
    if operator in _COMPARISONS:
        return _compare(col, operator, value)
    if operator is FilterOperator.LIKE and isinstance(value, str):
        return col.like(value)
    if operator is FilterOperator.ILIKE and isinstance(value, str):
        return _lowered(flt.field).like(value.lower())
    if operator is FilterOperator.IN and isinstance(value, list):
        return col.in_([_bind_value(v) for v in value])
    if operator is FilterOperator.NOT_IN and isinstance(value, list):
        return col.not_in([_bind_value(v) for v in value])
    if operator is FilterOperator.IS_NULL:
        return col.is_(None)
    if operator is FilterOperator.IS_NOT_NULL:
        return col.is_not(None)
    if operator is FilterOperator.BETWEEN and isinstance(value, list) and len(value) == 2:
        return col.between(_bind_value(value[0]), _bind_value(value[1]))
    if operator is FilterOperator.CONTAINS and isinstance(value, str):
        return col.like(f"%{value}%")
    return None


def _search_condition(search):
    pattern = search.query if search.exact_match else f"%{search.query}%"
    matches = []
    for field in search.fields:
        if search.case_sensitive:
            matches.append(column(field).like(pattern))
        else:
            matches.append(_lowered(field).like(pattern.lower()))
    if not matches:
        return None
    return or_(*matches)


def build_filter_condition(params):
    """Combine cursor, filters and search of ``params`` into one WHERE clause.

    Filters whose operator does not fit their value are skipped.
    """
    conditions = []
    if params.cursor is not None:
        conditions.append(_cursor_condition(params))
    for flt in params.filters:
        condition = _filter_condition(flt)
        if condition is not None:
            conditions.append(condition)
    if params.search is not None:
        condition = _search_condition(params.search)
        if condition is not None:
            conditions.append(condition)
    return and_(true(), *conditions)


def _selects_single_entity(query):
    descriptions = query.column_descriptions
    if len(descriptions) != 1:
        return False
    entity = descriptions[0].get("entity")
    return entity is not None and descriptions[0].get("expr") is entity


def _fetch(connection, query):
    result = connection.execute(query)
    if _selects_single_entity(query):
        return list(result.scalars().all())
    return [dict(row._mapping) for row in result.all()]


def paginate(select, connection, params):
    """Run ``select`` through ``connection`` and return one page of results.

    ``connection`` is a SQLAlchemy Connection or Session. Database failures
    are raised as :class:`PaginatorError`.
    """
    query = select.where(build_filter_condition(params))

    total = None
    if not params.disable_total_count:
        count_query = sa_select(func.count()).select_from(query.subquery())
        try:
            total = int(connection.execute(count_query).scalar_one())
        except SQLAlchemyError as exc:
            raise PaginatorError(f"Count query failed: {exc}") from exc

    if params.cursor is not None:
        query = query.limit(params.limit() + 1)
    else:
        query = query.offset(params.offset()).limit(params.limit())

    try:
        data = _fetch(connection, query)
    except SQLAlchemyError as exc:
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


def paginate_with_sort(select, connection, params, sort_fn):
    """Like :func:`paginate`, ordering first with ``sort_fn(select, field, direction)``.

    ``sort_fn`` is only called when both a sort field and a direction are set.
    """
    if params.sort_by is not None and params.sort_direction is not None:
        select = sort_fn(select, params.sort_by, params.sort_direction)
    return paginate(select, connection, params)