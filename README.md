# pagekit

Pagination for Python: page and per-page parameters, sorting, filters,
free-text search and cursors, plus paginated responses with the metadata a
client needs (`total`, `total_pages`, `has_next`, `has_prev`).

The same parameters can be applied to an in-memory collection, turned into
SQL or SurrealQL `WHERE` clauses, run against a SQL database, read from a
query string and rendered as an HTTP response with pagination headers.

## Installation

```
pip install pagekit
```

For running the test suite:

```
pip install "pagekit[test]"
pytest
```

## Building parameters

`PaginatorBuilder` collects everything a request asks for and `build()` hands
back a `PaginationParams`. Page numbers below 1 are raised to 1 and
`per_page` is kept between 1 and 100.

```python
from pagekit.builder import PaginatorBuilder

params = (
    PaginatorBuilder()
    .page(2)
    .per_page(10)
    .filter_gt("id", 3)
    .filter_like("email", "%example.com%")
    .search("john", ["name", "email"])
    .sort_by("name")
    .sort_desc()
    .build()
)

params.offset()          # 10
params.limit()           # 10
params.to_sql_where()    # "id > 3 AND email LIKE '%example.com%' AND (name ILIKE '%john%' OR email ILIKE '%john%')"
```

`PaginationParams.clamped(page, per_page)` builds plain parameters with the
same limits, and `with_sort`, `with_direction`, `with_filter`,
`with_filters` and `with_search` return copies with those settings added.
`to_surrealql_where()` renders the filters and search for SurrealDB.

## Cursors

Keyset pagination uses a cursor on a field. Cursors encode to an opaque
base64 string that can be handed to a client and read back later:

```python
from pagekit.builder import PaginatorBuilder

params = PaginatorBuilder().per_page(20).cursor_after("id", 120).build()
encoded = params.cursor.encode()

same = PaginatorBuilder().cursor_from_encoded(encoded).build()
```

`Cursor.decode` raises `ValueError` for a string that is not a valid cursor.

## Responses

`PaginatorResponseMeta.with_total(page, per_page, total)` works out the page
count and the next/previous flags; `without_total` and `with_cursors` cover
queries where the total is not counted. `PaginatorResponse.to_dict()` gives
the JSON-ready form, leaving out fields that are not set:

```python
from pagekit.response import PaginatorResponse, PaginatorResponseMeta

meta = PaginatorResponseMeta.with_total(1, 10, 25)
meta.total_pages   # 3
meta.has_next      # True

PaginatorResponse(data=[{"id": 1}], meta=meta).to_dict()
```

## Paginating a collection

Subclass `pagekit.paginator.Paginator` and override `paginate(params)` to
paginate your own data; `paginate_json(params)` then returns the page as
plain JSON data. The base `paginate` raises `InvalidPageError` or
`InvalidPerPageError` (from `pagekit.errors`) for a page below 1 or a page
size outside 1..100.

`pagekit.users.UserRepository` is such a subclass: it holds `User` records
and applies filters, search, sorting and paging in memory.

## Web APIs

- `pagekit.querystring.parse_pagination_query` reads `page`, `per_page`,
  `sort_by`, `sort_direction`, repeated `filter=field:op:value` entries,
  `search` and `search_fields` from a query string, a mapping or key/value
  pairs; bad numbers or repeated fields raise `InvalidQueryError`.
  `parse_simple_query` reads only paging and sorting and ignores bad values.
- `pagekit.filter_parser.parse_filter("age:gte:18")` turns one filter
  expression into a `Filter`, or `None` if it cannot be read.
- `pagekit.links.create_link_header(base_url, params, meta)` builds an RFC
  8288 `Link` header with `first`, `prev`, `next` and `last` relations.
- `pagekit.http.create_paginated_response(data, params, total)` returns a
  `PaginatedJson` whose `headers()` carry `X-Total-Count`, `X-Total-Pages`,
  `X-Current-Page` and `X-Per-Page`, and whose `body()` is the JSON payload.

These helpers are framework-neutral: pagekit does not plug into a web
framework or run a server itself; you pass the query string in and send the
headers and body out with the framework of your choice.

## Databases

- `pagekit.sql_builder.SqlQueryBuilder` appends filters and search to a SQL
  statement with bound parameters.
- `pagekit.sql.paginate_query(connection, base_query, params, dialect)` runs
  a count query and a page query around your own `SELECT` (plain or `WITH`)
  over a DB-API connection, for the chosen `Dialect`.
- `pagekit.orm.paginate` and `paginate_with_sort` apply the parameters to a
  SQLAlchemy `select`.
- `pagekit.surreal` paginates SurrealQL queries through any object with a
  `query(text)` method; it ships no SurrealDB client. Its `QueryBuilder`
  composes queries:

```python
from pagekit.surreal import QueryBuilder

QueryBuilder().select("id, name").from_table("users") \
    .where_clause("age > 18").and_where("status = 'active'").build_query()
# "SELECT id, name FROM users WHERE age > 18 AND status = 'active'"
```

## Demo

A short tour of paging, sorting, filtering and search over sample users
(`basic`, `filters` or `all`, the default):

```
pagekit-demo
```