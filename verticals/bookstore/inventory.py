"""Inventory updater.

Stock is committed in two passes: every line is validated before any
book record is touched, so an update either applies to all lines or to
none of them.
"""

import logging
from decimal import Decimal
from typing import Any

from patterns.rules_engine import RuleResult, check_stock_availability, evaluate_rules
from verticals.bookstore.errors import NotFoundError, OutOfStockError
from verticals.bookstore.models.schemas import Book, CartLine, InventoryReport, LowStockAlert
from verticals.bookstore.pricing import coerce_lines
from verticals.bookstore.repository import BookStore

logger = logging.getLogger(__name__)


def _validate_lines(store: BookStore, lines: list[CartLine]) -> None:
    # Repeated book ids are checked against their combined quantity.
    requested: dict[int, int] = {}
    for line in lines:
        if store.find_book(line.book_id) is None:
            raise NotFoundError(f"Book not found: {line.book_id}")
        requested[line.book_id] = requested.get(line.book_id, 0) + line.quantity

    results: list[RuleResult] = []
    for book_id, quantity in requested.items():
        book = store.get_book(book_id)
        results.append(check_stock_availability(book.title, book.stock, quantity))

    outcome = evaluate_rules(*results)
    if not outcome.all_passed:
        failure = outcome.first_failure
        raise OutOfStockError(f"Out of stock: {failure.details['title']}")


def update_inventory(store: BookStore, items: Any) -> list[Book]:
    """Decrement stock for every line, all or nothing.

    Raises NotFoundError or OutOfStockError before any mutation. Returns
    the post-commit catalog snapshot.
    """
    lines = coerce_lines(items)
    _validate_lines(store, lines)

    for line in lines:
        book = store.get_book(line.book_id)
        store.set_stock(book.id, book.stock - line.quantity)

    logger.info("Committed inventory for %d cart line(s)", len(lines))
    return store.list_books()


def low_stock_alerts(store: BookStore, items: Any, threshold: int = 1) -> list[LowStockAlert]:
    """Alerts for purchased books left with ``threshold`` units or fewer."""
    alerts = []
    for line in coerce_lines(items):
        book = store.find_book(line.book_id)
        if book is not None and book.stock <= threshold:
            alerts.append(LowStockAlert(book_id=book.id, title=book.title, remaining=book.stock))
    return alerts


def inventory_report(store: BookStore, threshold: int = 1) -> InventoryReport:
    """Stock health across the whole catalog."""
    books = store.list_books()
    return InventoryReport(
        total_titles=len(books),
        total_units=sum(b.stock for b in books),
        total_inventory_value=sum((b.price * b.stock for b in books), Decimal(0)),
        out_of_stock=[b for b in books if b.stock == 0],
        low_stock=[b for b in books if 0 < b.stock <= threshold],
        threshold=threshold,
    )
