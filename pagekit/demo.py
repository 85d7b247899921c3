"""Command-line walkthrough of in-memory pagination, filtering and search."""

from __future__ import annotations

import argparse
import json
import sys

from pagekit.builder import PaginatorBuilder
from pagekit.errors import PaginatorError
from pagekit.params import PaginationParams
from pagekit.users import User, UserRepository


def _format_page(result):
    return json.dumps(result.to_dict(), indent=2) + "\n"


def _run(label, action):
    """Print ``label``, then the text the action returns, if any."""
    print(label)
    try:
        text = action()
    except PaginatorError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return
    if text is not None:
        print(text)


def _basic():
    users = UserRepository(
        [
            User(1, "John Doe", "john@example.com"),
            User(2, "Jane Doe", "jane@example.com"),
            User(3, "Bob Doe", "bob@example.com"),
            User(4, "Alice Smith", "alice@example.com"),
            User(5, "Charlie Brown", "charlie@example.com"),
        ]
    )

    _run(
        "=== Example 1: Simple pagination (page 1, 2 items per page) ===",
        lambda: _format_page(users.paginate(PaginationParams.clamped(1, 2))),
    )
    _run(
        "=== Example 2: Page 2 with 2 items per page ===",
        lambda: _format_page(users.paginate(PaginationParams.clamped(2, 2))),
    )
    _run(
        "=== Example 3: Using builder pattern with sorting ===",
        lambda: _format_page(
            users.paginate(
                PaginatorBuilder().page(1).per_page(3).sort_by("name").sort_asc().build()
            )
        ),
    )
    _run(
        "=== Example 4: Sort by email descending ===",
        lambda: _format_page(
            users.paginate(
                PaginatorBuilder().page(1).per_page(10).sort_by("email").sort_desc().build()
            )
        ),
    )

    def json_output():
        payload = users.paginate_json(PaginationParams())
        return json.dumps(payload, indent=2) + "\n"

    _run("=== Example 5: JSON output ===", json_output)


def _list_ids(heading, result):
    lines = [heading]
    lines.extend(f"  - ID: {user.id}, Name: {user.name}" for user in result.data)
    return "\n".join(lines) + "\n"


def _filters():
    users = UserRepository(
        [
            User(1, "John Doe", "john@example.com"),
            User(2, "Jane Doe", "jane@example.com"),
            User(3, "Bob Smith", "bob.smith@example.com"),
            User(4, "Alice Johnson", "alice@example.com"),
            User(5, "Charlie Brown", "charlie@example.com"),
            User(6, "David Wilson", "david@example.com"),
            User(7, "Eve Davis", "eve@example.com"),
            User(8, "Frank Miller", "frank@example.com"),
        ]
    )

    def greater_than_three():
        result = users.paginate(
            PaginatorBuilder().page(1).per_page(10).filter_gt("id", 3).build()
        )
        return _list_ids(f"Found {len(result.data)} users with ID > 3", result)

    _run("=== Example 1: Filter by ID greater than 3 ===", greater_than_three)

    def range_filter():
        params = (
            PaginatorBuilder()
            .page(1)
            .per_page(10)
            .filter_gte("id", 2)
            .filter_lte("id", 6)
            .sort_by("name")
            .sort_asc()
            .build()
        )
        result = users.paginate(params)
        return _list_ids(f"Found {len(result.data)} users with ID between 2 and 6:", result)

    _run("=== Example 2: Filter with multiple conditions ===", range_filter)

    def search_name():
        params = (
            PaginatorBuilder().page(1).per_page(10).search("john", ["name", "email"]).build()
        )
        result = users.paginate(params)
        lines = ["Search results for 'john':"]
        lines.extend(f"  - Name: {user.name}, Email: {user.email}" for user in result.data)
        return "\n".join(lines) + "\n"

    _run("=== Example 3: Search by name ===", search_name)

    def combined():
        params = (
            PaginatorBuilder()
            .page(1)
            .per_page(5)
            .filter_gt("id", 2)
            .search("smith", ["name", "email"])
            .sort_by("id")
            .sort_desc()
            .build()
        )
        result = users.paginate(params)
        lines = ["Combined filter and search results:"]
        if result.meta.total is not None:
            lines.append(f"Total matching: {result.meta.total}")
        if result.meta.total_pages is not None:
            lines.append(f"Page {result.meta.page}/{result.meta.total_pages}")
        lines.extend(
            f"  - ID: {user.id}, Name: {user.name}, Email: {user.email}"
            for user in result.data
        )
        return "\n".join(lines) + "\n"

    _run("=== Example 4: Combined filters and search ===", combined)

    _run(
        "=== Example 5: Filter using IN operator ===",
        lambda: _list_ids(
            "Users with ID in [1, 3, 5, 7]:",
            users.paginate(
                PaginatorBuilder().page(1).per_page(10).filter_in("id", [1, 3, 5, 7]).build()
            ),
        ),
    )

    def sql_where():
        params = (
            PaginatorBuilder()
            .filter_eq("status", "active")
            .filter_gt("age", 18)
            .search("john", ["name", "email"])
            .build()
        )
        where = params.to_sql_where()
        if where is None:
            return None
        return f"Generated SQL WHERE clause:\n  WHERE {where}\n"

    _run("=== Example 6: Display SQL WHERE clause ===", sql_where)

    _run(
        "=== Example 7: BETWEEN filter ===",
        lambda: _list_ids(
            "Users with ID BETWEEN 3 AND 6:",
            users.paginate(PaginatorBuilder().filter_between("id", 3, 6).build()),
        ),
    )


_DEMOS = {"basic": _basic, "filters": _filters}


def main(argv=None):
    """Run the chosen walkthrough (``basic``, ``filters`` or ``all``)."""
    parser = argparse.ArgumentParser(
        prog="pagekit-demo", description="Show pagination of an in-memory user list."
    )
    parser.add_argument(
        "demo", nargs="?", default="all", choices=["all", *_DEMOS], help="which demo to run"
    )
    args = parser.parse_args(argv)
    names = list(_DEMOS) if args.demo == "all" else [args.demo]
    for name in names:
        _DEMOS[name]()
    return 0


if __name__ == "__main__":
    sys.exit(main())