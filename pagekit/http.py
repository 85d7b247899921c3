"""Framework-neutral JSON responses for paginated results."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import ClassVar

from pagekit.errors import PaginatorSerializationError
from pagekit.response import PaginatorResponse, PaginatorResponseMeta


@dataclass
class PaginatedJson:
    """A paginated result ready to send as an HTTP JSON response."""

    response: PaginatorResponse
    status_code: ClassVar[int] = 200
    content_type: ClassVar[str] = "application/json"

    @classmethod
    def create(cls, data, params, total):
        """Wrap ``data`` with metadata computed from ``params`` and ``total``."""
        meta = PaginatorResponseMeta.with_total(params.page, params.per_page, total)
        return cls(PaginatorResponse(data=list(data), meta=meta))

    def headers(self):
        """Pagination headers; totals are present only when known."""
        meta = self.response.meta
        result = {}
        if meta.total is not None:
            result["X-Total-Count"] = str(meta.total)
        if meta.total_pages is not None:
            result["X-Total-Pages"] = str(meta.total_pages)
        result["X-Current-Page"] = str(meta.page)
        result["X-Per-Page"] = str(meta.per_page)
        result["Content-Type"] = self.content_type
        return result

    def body(self):
        """The response serialised as compact JSON text."""
        try:
            return json.dumps(
                self.response.to_dict(), separators=(",", ":"), allow_nan=False
            )
        except (TypeError, ValueError) as exc:
            raise PaginatorSerializationError(str(exc)) from exc


def create_paginated_response(data, params, total):
    """Shorthand for :meth:`PaginatedJson.create`."""
    return PaginatedJson.create(data, params, total)