"""Opaque cursors for keyset pagination."""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from enum import Enum
from typing import Union

CursorValue = Union[str, int, float]


class CursorDirection(str, Enum):
    """Which side of the cursor to fetch."""

    AFTER = "after"
    BEFORE = "before"


@dataclass
class Cursor:
    """A position in an ordered result set: a field, its value and a direction."""

    field: str
    value: CursorValue
    direction: CursorDirection

    def __post_init__(self):
        self.direction = CursorDirection(self.direction)

    def encode(self):
        """Return the cursor as base64-encoded JSON."""
        payload = {
            "field": self.field,
            "value": self.value,
            "direction": self.direction.value,
        }
        text = json.dumps(
            payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        )
        return base64.b64encode(text.encode("utf-8")).decode("ascii")

    @classmethod
    def decode(cls, encoded):
        """Parse a cursor produced by :meth:`encode`; raise ValueError if malformed."""
        try:
            raw = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"invalid cursor encoding: {exc}") from exc
        try:
            payload = json.loads(raw.decode("utf-8"))
        except ValueError as exc:
            raise ValueError(f"invalid cursor payload: {exc}") from exc
        return cls._from_json(payload)

    @classmethod
    def _from_json(cls, payload):
        if not isinstance(payload, dict):
            raise ValueError("cursor payload must be an object")
        for key in ("field", "value", "direction"):
            if key not in payload:
                raise ValueError(f"missing field `{key}`")
        field_name = payload["field"]
        value = payload["value"]
        direction = payload["direction"]
        if not isinstance(field_name, str):
            raise ValueError("cursor field must be a string")
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise ValueError("cursor value must be a string, integer or float")
        try:
            direction = CursorDirection(direction)
        except ValueError as exc:
            raise ValueError(f"unknown cursor direction: {direction!r}") from exc
        return cls(field_name, value, direction)