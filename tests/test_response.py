from dataclasses import dataclass

import pytest

from pagekit.response import PaginatorResponse, PaginatorResponseMeta


@pytest.mark.parametrize(
    "page,per_page,total,pages,has_next,has_prev",
    [
        (1, 10, 2, 1, False, False),
        (1, 10, 0, 0, False, False),
        (1, 10, 10, 1, False, False),
        (1, 10, 25, 3, True, False),
        (2, 10, 25, 3, True, True),
        (3, 10, 25, 3, False, True),
        (5, 20, 100, 5, False, True),
    ],
)
def test_with_total(page, per_page, total, pages, has_next, has_prev):
    meta = PaginatorResponseMeta.with_total(page, per_page, total)
    assert meta.total == total
    assert meta.total_pages == pages
    assert (meta.has_next, meta.has_prev) == (has_next, has_prev)


def test_page_beyond_total_keeps_page():
    meta = PaginatorResponseMeta.with_total(10, 10, 2)
    assert meta.page == 10
    assert meta.total_pages == 1
    assert meta.has_next is False


def test_without_total_omits_counts():
    meta = PaginatorResponseMeta.without_total(2, 10, True)
    assert meta.total is None and meta.total_pages is None
    assert meta.has_next is True and meta.has_prev is True
    assert "total" not in meta.to_dict()
    assert "total_pages" not in meta.to_dict()


def test_with_cursors_prev_cursor_sets_has_prev():
    meta = PaginatorResponseMeta.with_cursors(1, 10, None, False, None, "abc")
    assert meta.has_prev is True
    assert meta.total_pages is None
    assert meta.to_dict()["prev_cursor"] == "abc"
    assert "next_cursor" not in meta.to_dict()


def test_with_cursors_total_matches_with_total():
    cursor_meta = PaginatorResponseMeta.with_cursors(1, 10, 25, True, None, None)
    plain_meta = PaginatorResponseMeta.with_total(1, 10, 25)
    assert cursor_meta.total_pages == plain_meta.total_pages
    assert cursor_meta.has_prev is False


def test_response_to_dict_matches_wire_format():
    data = [
        {"id": 1, "name": "John Doe", "email": "john@example.com"},
        {"id": 2, "name": "Jane Doe", "email": "jane@example.com"},
    ]
    response = PaginatorResponse(data, PaginatorResponseMeta.with_total(1, 10, 2))
    assert response.to_dict() == {
        "data": data,
        "meta": {
            "page": 1,
            "per_page": 10,
            "total": 2,
            "total_pages": 1,
            "has_next": False,
            "has_prev": False,
        },
    }


def test_response_serialises_dataclass_items():
    @dataclass
    class Item:
        id: int
        name: str

    response = PaginatorResponse(
        [Item(1, "a")], PaginatorResponseMeta.without_total(1, 10, False)
    )
    assert response.to_dict()["data"] == [{"id": 1, "name": "a"}]