"""Test cart management."""
import pytest
from decimal import Decimal
from verticals.bookstore.cart import add_to_cart
from verticals.bookstore.errors import InvalidInputError, NotFoundError, OutOfStockError
from verticals.bookstore.repository import BookStore


def test_add_new_line_captures_price():
    store = BookStore()
    cart = add_to_cart(store, 1, 2)
    assert len(cart) == 1
    assert cart[0].book_id == 1
    assert cart[0].quantity == 2
    assert cart[0].unit_price == Decimal("30")


def test_repeat_add_merges_line():
    store = BookStore()
    add_to_cart(store, 2, 1)
    add_to_cart(store, 3, 1)
    cart = add_to_cart(store, 2, 1)
    assert [line.book_id for line in cart] == [2, 3]
    assert cart[0].quantity == 2


def test_add_does_not_touch_inventory():
    store = BookStore()
    add_to_cart(store, 1, 3)
    assert store.get_book(1).stock == 5


def test_unknown_book():
    store = BookStore()
    with pytest.raises(NotFoundError):
        add_to_cart(store, 42, 1)


@pytest.mark.parametrize("quantity", [0, -1, 1.5, "2", None, True])
def test_invalid_quantity(quantity):
    store = BookStore()
    with pytest.raises(InvalidInputError, match="positive integer"):
        add_to_cart(store, 1, quantity)


def test_quantity_over_stock():
    store = BookStore()
    with pytest.raises(OutOfStockError, match="exceeds stock"):
        add_to_cart(store, 5, 2)
    assert store.cart_lines() == []


def test_merged_quantity_over_stock():
    store = BookStore()
    add_to_cart(store, 3, 2)
    with pytest.raises(OutOfStockError, match="exceeds stock"):
        add_to_cart(store, 3, 1)
    assert store.find_line(3).quantity == 2


def test_cart_snapshot_does_not_alias():
    store = BookStore()
    cart = add_to_cart(store, 1, 1)
    cart.clear()
    assert len(store.cart_lines()) == 1
