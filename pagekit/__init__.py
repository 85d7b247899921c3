"""Pagination parameters, filters, search, cursors and paginated responses."""

__version__ = "0.2.1"