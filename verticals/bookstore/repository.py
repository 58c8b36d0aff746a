"""In-memory catalog and session cart for the bookstore.

Holds the only mutable state of the checkout: book stock and the cart.
Reads hand out frozen snapshots; writes replace records wholesale so no
caller ever holds a reference into the store.
"""

import logging
from decimal import Decimal
from typing import Iterable

from verticals.bookstore.errors import NotFoundError
from verticals.bookstore.models.schemas import Book, CartLine

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Seed catalog
# ---------------------------------------------------------------------------

SEED_BOOKS: tuple[Book, ...] = (
    Book(id=1, title="JavaScript Essentials", author="John Doe", price=Decimal("30"), stock=5),
    Book(id=2, title="Learning Python", author="Jane Roe", price=Decimal("35"), stock=3),
    Book(id=3, title="Web Development with Node.js", author="Alice Smith", price=Decimal("40"), stock=2),
    Book(id=4, title="Data Structures in C", author="Bob Brown", price=Decimal("25"), stock=4),
    Book(id=5, title="Introduction to AI", author="Chris Green", price=Decimal("50"), stock=1),
)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class BookStore:
    """In-memory catalog plus one cart.

    Each instance is isolated, so tests and sessions can run side by side::

        store = BookStore()
        store.search("python")
        store.reset()
    """

    def __init__(self, seed: Iterable[Book] = SEED_BOOKS):
        self._seed = tuple(seed)
        self._books: dict[int, Book] = {}
        self._cart: list[CartLine] = []
        self.reset()

    # -- Lifecycle --

    def reset(self) -> None:
        """Restore the seed catalog and empty the cart."""
        self._books = {book.id: book for book in self._seed}
        self._cart = []
        logger.debug("Store reset to %d seed books", len(self._books))

    # -- Catalog reads --

    def list_books(self) -> list[Book]:
        """Snapshot of the whole catalog in seed order."""
        return list(self._books.values())

    def find_book(self, book_id: int) -> Book | None:
        return self._books.get(book_id)

    def get_book(self, book_id: int) -> Book:
        """Get a single book or raise NotFoundError."""
        book = self._books.get(book_id)
        if book is None:
            raise NotFoundError(f"Book not found: {book_id}")
        return book

    def search(self, query: str | None = "") -> list[Book]:
        """Case-insensitive substring match on title or author.

        An empty query returns the full catalog.
        """
        q = str(query if query is not None else "").strip().lower()
        if not q:
            return self.list_books()
        return [
            b for b in self._books.values()
            if q in b.title.lower() or q in b.author.lower()
        ]

    # -- Catalog writes --

    def set_stock(self, book_id: int, stock: int) -> Book:
        """Replace a book record with a new stock level."""
        book = self.get_book(book_id)
        updated = book.model_copy(update={"stock": stock})
        self._books[book_id] = updated
        return updated

    def replace_books(self, books: Iterable[Book]) -> None:
        """Swap in a previously taken catalog snapshot."""
        self._books = {book.id: book for book in books}

    # -- Cart --

    def cart_lines(self) -> list[CartLine]:
        """Snapshot of the cart in insertion order."""
        return list(self._cart)

    def find_line(self, book_id: int) -> CartLine | None:
        return next((line for line in self._cart if line.book_id == book_id), None)

    def put_line(self, line: CartLine) -> None:
        """Insert a line, or replace the line for the same book in place."""
        for index, existing in enumerate(self._cart):
            if existing.book_id == line.book_id:
                self._cart[index] = line
                return
        self._cart.append(line)

    def replace_cart(self, lines: Iterable[CartLine]) -> None:
        """Swap in a previously taken cart snapshot."""
        self._cart = list(lines)

    def clear_cart(self) -> None:
        self._cart = []
