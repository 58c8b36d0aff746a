"""Cart management.

Adding to the cart never touches inventory; stock is only checked here and
decremented later by the inventory updater, after payment succeeds.
"""

import logging

from patterns.rules_engine import (
    check_positive_quantity,
    check_stock_availability,
    evaluate_rules,
)
from verticals.bookstore.errors import InvalidInputError, OutOfStockError
from verticals.bookstore.models.schemas import CartLine
from verticals.bookstore.repository import BookStore

logger = logging.getLogger(__name__)


def add_to_cart(store: BookStore, book_id: int, quantity: int) -> list[CartLine]:
    """Add ``quantity`` copies of a book, merging with an existing line.

    Raises NotFoundError, InvalidInputError or OutOfStockError. Returns a
    snapshot of the cart.
    """
    book = store.get_book(book_id)

    quantity_rule = check_positive_quantity(quantity)
    if not quantity_rule.passed:
        raise InvalidInputError(quantity_rule.message)

    existing = store.find_line(book_id)
    reserved = existing.quantity if existing else 0

    result = evaluate_rules(
        check_stock_availability(book.title, book.stock, quantity, already_reserved=reserved),
    )
    if not result.all_passed:
        raise OutOfStockError(result.first_failure.message)

    if existing:
        line = existing.model_copy(update={"quantity": reserved + quantity})
    else:
        line = CartLine(book_id=book.id, quantity=quantity, unit_price=book.price)
    store.put_line(line)

    logger.debug("Cart line for book %s now at quantity %d", book.id, line.quantity)
    return store.cart_lines()
