"""Test the inventory updater."""
import pytest
from decimal import Decimal
from verticals.bookstore.errors import NotFoundError, OutOfStockError
from verticals.bookstore.inventory import inventory_report, low_stock_alerts, update_inventory
from verticals.bookstore.models.schemas import CartLine
from verticals.bookstore.repository import BookStore


def _line(book_id, quantity):
    return CartLine(book_id=book_id, quantity=quantity, unit_price=Decimal("10"))


def test_decrements_all_lines():
    store = BookStore()
    books = update_inventory(store, [_line(2, 1), _line(3, 1)])
    stock = {b.id: b.stock for b in books}
    assert stock[2] == 2
    assert stock[3] == 1


def test_atomic_on_out_of_stock():
    store = BookStore()
    with pytest.raises(OutOfStockError, match="Out of stock: Introduction to AI"):
        update_inventory(store, [_line(1, 1), _line(5, 2), _line(2, 1)])
    assert store.get_book(1).stock == 5
    assert store.get_book(2).stock == 3
    assert store.get_book(5).stock == 1


def test_atomic_on_unknown_book():
    store = BookStore()
    with pytest.raises(NotFoundError, match="Book not found: 77"):
        update_inventory(store, [_line(1, 1), _line(77, 1)])
    assert store.get_book(1).stock == 5


def test_repeated_lines_checked_together():
    store = BookStore()
    with pytest.raises(OutOfStockError):
        update_inventory(store, [_line(3, 1), _line(3, 2)])
    assert store.get_book(3).stock == 2


def test_exact_stock_reaches_zero():
    store = BookStore()
    update_inventory(store, [_line(5, 1)])
    assert store.get_book(5).stock == 0


def test_low_stock_alerts_after_commit():
    store = BookStore()
    cart = [_line(5, 1), _line(1, 1)]
    update_inventory(store, cart)
    alerts = low_stock_alerts(store, cart)
    assert len(alerts) == 1
    assert alerts[0].book_id == 5
    assert alerts[0].remaining == 0
    assert alerts[0].title == "Introduction to AI"


def test_low_stock_threshold():
    store = BookStore()
    alerts = low_stock_alerts(store, [_line(3, 1), _line(4, 1)], threshold=2)
    assert [a.book_id for a in alerts] == [3]


def test_inventory_report():
    store = BookStore()
    store.set_stock(4, 0)
    report = inventory_report(store, threshold=2)
    assert report.total_titles == 5
    assert report.total_units == 5 + 3 + 2 + 0 + 1
    assert report.total_inventory_value == Decimal(150 + 105 + 80 + 0 + 50)
    assert [b.id for b in report.out_of_stock] == [4]
    assert [b.id for b in report.low_stock] == [3, 5]
