"""Bookstore error types.

Library operations raise these; the purchase orchestrator turns them into
``PurchaseFailure`` values using ``code``.
"""


class BookstoreError(Exception):
    """Base class for every checkout error."""

    code = "bookstore_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(BookstoreError):
    """Unknown book id."""

    code = "not_found"


class InvalidInputError(BookstoreError, ValueError):
    """Bad quantity, cart shape or amount."""

    code = "invalid_input"


class OutOfStockError(BookstoreError):
    """Requested or committed quantity exceeds stock."""

    code = "out_of_stock"


class PaymentFailedError(BookstoreError):
    code = "payment_failed"


class SearchMismatchError(BookstoreError):
    """Selected book id is not in fresh search results."""

    code = "search_mismatch"
