"""Pagination of SurrealQL queries.

The ``db`` object passed to these functions needs one method, ``query(text)``.
It returns one result per statement, in order. Each result is a list of
records (dicts) or a ``{"status": ..., "result": [...]}`` envelope.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pagekit.cursor import CursorDirection
from pagekit.errors import PaginatorError
from pagekit.filters import sql_literal
from pagekit.params import SortDirection
from pagekit.response import PaginatorResponse, PaginatorResponseMeta


@dataclass
class CountResult:
    """A row returned by ``SELECT count() ...``."""

    count: int

    @classmethod
    def from_row(cls, row):
        """Read a count row; raise ValueError if it has no integer ``count``."""
        if not isinstance(row, dict) or "count" not in row:
            raise ValueError(f"missing field `count` in {row!r}")
        value = row["count"]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"invalid count value: {value!r}")
        return cls(count=value)


def _first_statement(result):
    if isinstance(result, dict):
        result = [result]
    if not result:
        raise ValueError("query returned no statement results")
    first = result[0]
    if isinstance(first, dict) and "result" in first:
        status = first.get("status", "OK")
        if status != "OK":
            raise ValueError(f"statement failed: {first.get('result')}")
        first = first["result"]
    if first is None:
        return []
    if isinstance(first, list):
        return list(first)
    return [first]


def _append_condition(query, condition):
    keyword = " AND " if " WHERE " in query.upper() else " WHERE "
    return f"{query}{keyword}{condition}"


def _count_query(base_query):
    if not base_query.strip().upper().startswith("SELECT"):
        raise PaginatorError("Query must start with SELECT")
    from_pos = base_query.upper().find("FROM")
    if from_pos < 0:
        raise PaginatorError("Invalid query: missing FROM clause")
    return f"SELECT count() {base_query[from_pos:]}"


def _cursor_operator(params):
    descending = params.sort_direction is SortDirection.DESC
    if params.cursor.direction is CursorDirection.AFTER:
        return "<" if descending else ">"
    return ">" if descending else "<"


def _cursor_literal(value):
    if isinstance(value, str):
        return "'" + value.replace("'", "\\'") + "'"
    return sql_literal(value)


def _run(db, query, failure):
    try:
        return db.query(query)
    except Exception as exc:
        raise PaginatorError(f"{failure}: {exc}") from exc


def _fetch_total(db, base_query, params, where):
    count_query = _count_query(base_query)
    if where is not None:
        count_query = _append_condition(count_query, where)
    raw = _run(db, count_query, "Count query failed")
    try:
        counts = [CountResult.from_row(row) for row in _first_statement(raw)]
    except (ValueError, TypeError) as exc:
        raise PaginatorError(f"Failed to extract count: {exc}") from exc
    return counts[0].count if counts else None


def paginate_query(db, base_query, params):
    """Fetch one page of the SurrealQL ``base_query`` from ``db``.

    Filters, search and cursor are appended as WHERE conditions, then sorting
    and ``LIMIT``/``START``. Failures raise :class:`PaginatorError`.
    """
    where = params.to_surrealql_where()

    total = None
    if not params.disable_total_count:
        total = _fetch_total(db, base_query, params, where)

    query = base_query
    if where is not None:
        query = _append_condition(query, where)

    if params.cursor is not None:
        cursor = params.cursor
        query = _append_condition(
            query,
            f"{cursor.field} {_cursor_operator(params)} {_cursor_literal(cursor.value)}",
        )

    if params.sort_by is not None:
        direction = "DESC" if params.sort_direction is SortDirection.DESC else "ASC"
        query += f" ORDER BY {params.sort_by} {direction}"

    if params.cursor is not None:
        query += f" LIMIT {params.limit() + 1}"
    else:
        query += f" LIMIT {params.limit()} START {params.offset()}"

    raw = _run(db, query, "Paginated query failed")
    try:
        data = _first_statement(raw)
    except (ValueError, TypeError) as exc:
        raise PaginatorError(f"Failed to extract results: {exc}") from exc

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


def paginate_table(db, table, where_clause, params):
    """Paginate every record of ``table``, optionally restricted by ``where_clause``."""
    if where_clause is not None:
        base_query = f"SELECT * FROM {table} WHERE {where_clause}"
    else:
        base_query = f"SELECT * FROM {table}"
    return paginate_query(db, base_query, params)


def paginate_by_id_range(db, table, start_id, end_id, params):
    """Paginate records of ``table`` whose id lies within the given bounds."""
    conditions = []
    if start_id is not None:
        conditions.append(f"id >= {start_id}")
    if end_id is not None:
        conditions.append(f"id <= {end_id}")
    where_clause = " AND ".join(conditions) if conditions else None
    return paginate_table(db, table, where_clause, params)


@dataclass
class QueryBuilder:
    """Builds a simple ``SELECT ... FROM ... WHERE ...`` SurrealQL query.

    Each method updates the builder and returns it for chaining.
    """

    fields: str = "*"
    table: str | None = None
    conditions: list = field(default_factory=list)

    def select(self, fields):
        """Set the selected fields."""
        self.fields = fields
        return self

    def from_table(self, table):
        """Set the table to select from."""
        self.table = table
        return self

    def where_clause(self, condition):
        """Add a condition."""
        self.conditions.append(condition)
        return self

    def and_where(self, condition):
        """Add another condition, joined with AND."""
        self.conditions.append(condition)
        return self

    def build_query(self):
        """Return the query text; raise PaginatorError if no table was given."""
        if self.table is None:
            raise PaginatorError("FROM clause is required")
        query = f"SELECT {self.fields} FROM {self.table}"
        if self.conditions:
            query += " WHERE " + " AND ".join(self.conditions)
        return query

    def paginate(self, db, params):
        """Build the query and paginate it against ``db``."""
        return paginate_query(db, self.build_query(), params)