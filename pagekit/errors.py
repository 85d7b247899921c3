"""Exceptions raised by pagination routines."""


class PaginatorError(Exception):
    """Base error for every pagination failure; also used for free-form errors."""


class InvalidPageError(PaginatorError):
    """Raised when a page number is below 1."""

    def __init__(self, page):
        self.page = page
        super().__init__(f"Invalid page number: {page}. Page must be >= 1")


class InvalidPerPageError(PaginatorError):
    """Raised when a page size is outside 1..100."""

    def __init__(self, per_page):
        self.per_page = per_page
        super().__init__(
            f"Invalid per_page value: {per_page}. Must be between 1 and 100"
        )


class PaginatorSerializationError(PaginatorError):
    """Raised when a result cannot be turned into JSON."""

    def __init__(self, message):
        self.detail = message
        super().__init__(f"Serialization error: {message}")