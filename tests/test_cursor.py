import base64
import json

import pytest

from pagekit.cursor import Cursor, CursorDirection


def test_cursor_encode_decode_string():
    cursor = Cursor("id", "abc123", CursorDirection.AFTER)
    assert Cursor.decode(cursor.encode()) == cursor


def test_cursor_encode_decode_int():
    cursor = Cursor("id", 12345, CursorDirection.BEFORE)
    assert Cursor.decode(cursor.encode()) == cursor


def test_cursor_encode_decode_float():
    cursor = Cursor("timestamp", 1234567890.123, CursorDirection.AFTER)
    decoded = Cursor.decode(cursor.encode())
    assert decoded == cursor
    assert isinstance(decoded.value, float)


def test_encoded_payload_is_compact_json():
    cursor = Cursor("id", 5, CursorDirection.AFTER)
    text = base64.b64decode(cursor.encode()).decode("utf-8")
    assert text == '{"field":"id","value":5,"direction":"after"}'


def test_direction_accepts_plain_string():
    cursor = Cursor("id", 1, "before")
    assert cursor.direction is CursorDirection.BEFORE


def test_decode_rejects_bad_base64():
    with pytest.raises(ValueError):
        Cursor.decode("not base64 !!")


def test_decode_rejects_non_json():
    with pytest.raises(ValueError):
        Cursor.decode(base64.b64encode(b"hello").decode())


@pytest.mark.parametrize(
    "payload",
    [
        {"field": "id", "value": True, "direction": "after"},
        {"field": "id", "value": 1, "direction": "sideways"},
        {"field": "id", "direction": "after"},
        [1, 2, 3],
    ],
)
def test_decode_rejects_invalid_payload(payload):
    encoded = base64.b64encode(json.dumps(payload).encode()).decode()
    with pytest.raises(ValueError):
        Cursor.decode(encoded)