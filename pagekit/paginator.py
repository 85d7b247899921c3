"""Base class for collections that can be paginated."""

from __future__ import annotations

import json

from pagekit.errors import InvalidPageError, InvalidPerPageError, PaginatorSerializationError
from pagekit.params import MAX_PER_PAGE
from pagekit.response import PaginatorResponse, PaginatorResponseMeta


class Paginator:
    """A source of paginated results.

    Subclasses override :meth:`paginate`; :meth:`paginate_json` builds on it.
    """

    def paginate(self, params):
        """Validate ``params`` and return an empty page."""
        if params.page < 1:
            raise InvalidPageError(params.page)
        if not 1 <= params.per_page <= MAX_PER_PAGE:
            raise InvalidPerPageError(params.per_page)
        return PaginatorResponse(
            data=[], meta=PaginatorResponseMeta.with_total(0, params.per_page, 0)
        )

    def paginate_json(self, params):
        """Return the page as plain JSON values (dicts, lists, scalars)."""
        response = self.paginate(params)
        try:
            text = json.dumps(response.to_dict(), allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise PaginatorSerializationError(str(exc)) from exc
        return json.loads(text)