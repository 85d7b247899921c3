"""Free-text search across several fields."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass


@dataclass
class SearchParams:
    """A search term matched against a list of fields."""

    query: str
    fields: list = dataclasses.field(default_factory=list)
    case_sensitive: bool = False
    exact_match: bool = False

    def with_case_sensitive(self, sensitive):
        """Return a copy with case sensitivity set."""
        return dataclasses.replace(self, case_sensitive=sensitive)

    def with_exact_match(self, exact):
        """Return a copy with exact matching set."""
        return dataclasses.replace(self, exact_match=exact)

    def _pattern(self):
        escaped = self.query.replace("'", "''")
        if self.exact_match:
            return f"'{escaped}'"
        return f"'%{escaped}%'"

    def to_sql_where(self):
        """Render the search as an OR of LIKE/ILIKE conditions in parentheses."""
        pattern = self._pattern()
        operator = "LIKE" if self.case_sensitive else "ILIKE"
        conditions = [f"{field} {operator} {pattern}" for field in self.fields]
        return "(" + " OR ".join(conditions) + ")"