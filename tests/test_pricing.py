"""Test the pricing engine."""
import pytest
from decimal import Decimal
from patterns.domain_config import CouponRule, PricingConfig
from verticals.bookstore.errors import InvalidInputError
from verticals.bookstore.models.schemas import CartLine
from verticals.bookstore.pricing import calculate_total, round_money


def _line(book_id, price, quantity=1):
    return CartLine(book_id=book_id, quantity=quantity, unit_price=Decimal(price))


def test_flat_coupon_express_shipping():
    cart = [_line(2, "35"), _line(3, "40")]
    b = calculate_total(cart, coupon_code="FLAT5", shipping_option="express")
    assert b.subtotal == Decimal("75")
    assert b.discount == Decimal("5")
    assert b.shipping == Decimal("15")
    assert b.taxable == Decimal("85")
    assert b.tax == Decimal("8.5")
    assert b.total == Decimal("93.5")
    assert b.coupon_applied
    assert b.coupon_code == "FLAT5"


def test_unknown_coupon_pickup():
    b = calculate_total([_line(1, "30")], coupon_code="NOTACOUPON", shipping_option="pickup")
    assert b.subtotal == Decimal("30")
    assert b.discount == 0
    assert not b.coupon_applied
    assert b.coupon_code is None
    assert b.shipping == 0
    assert b.tax == Decimal("3.0")
    assert b.total == Decimal("33.0")


def test_percent_coupon():
    b = calculate_total([_line(1, "30")], coupon_code="SAVE10", shipping_option="standard")
    assert b.discount == Decimal("3.00")
    # (30 - 3) + 5 = 32, tax 3.20
    assert b.taxable == Decimal("32")
    assert b.tax == Decimal("3.20")
    assert b.total == Decimal("35.20")


def test_unrecognised_shipping_falls_back_to_standard():
    b = calculate_total([_line(1, "30")], shipping_option="teleport")
    assert b.shipping == Decimal("5")
    assert b.shipping_option == "standard"


def test_flat_coupon_capped_at_subtotal():
    pricing = PricingConfig(coupons={"BIG": CouponRule(type="flat", value=Decimal("100"))})
    b = calculate_total([_line(4, "25")], coupon_code="BIG", shipping_option="pickup", pricing=pricing)
    assert b.discount == Decimal("25")
    assert b.taxable == 0
    assert b.total == 0


def test_empty_cart_still_charges_shipping():
    b = calculate_total([], shipping_option="standard")
    assert b.subtotal == 0
    assert b.total == Decimal("5.50")


def test_rounding_is_half_away_from_zero():
    assert round_money(Decimal("0.125")) == Decimal("0.13")
    assert round_money(Decimal("-0.125")) == Decimal("-0.13")
    assert round_money(Decimal("2.675")) == Decimal("2.68")


def test_percent_discount_uses_raw_subtotal():
    pricing = PricingConfig(coupons={"P15": CouponRule(type="percent", value=Decimal("15"))})
    # 3 x 0.35 = 1.05; 15% = 0.1575 -> 0.16
    b = calculate_total([_line(1, "0.35", quantity=3)], coupon_code="P15",
                        shipping_option="pickup", pricing=pricing)
    assert b.discount == Decimal("0.16")
    # taxable 0.89, tax 0.089 -> 0.09, total 0.98
    assert b.tax == Decimal("0.09")
    assert b.total == Decimal("0.98")


def test_accepts_plain_mappings():
    b = calculate_total([{"book_id": 1, "quantity": 2, "unit_price": 30}], shipping_option="pickup")
    assert b.subtotal == Decimal("60")
    assert b.items[0].quantity == 2


def test_rejects_non_list_cart():
    with pytest.raises(InvalidInputError, match="Cart must be a list"):
        calculate_total({"book_id": 1})
    with pytest.raises(InvalidInputError):
        calculate_total("cart")


def test_rejects_bad_line():
    with pytest.raises(InvalidInputError, match="Invalid cart line"):
        calculate_total([{"book_id": 1, "quantity": 0, "unit_price": 30}])


def test_custom_tax_rate():
    b = calculate_total([_line(1, "30")], shipping_option="pickup",
                        pricing=PricingConfig(tax_rate=Decimal("0.08")))
    assert b.tax == Decimal("2.40")
    assert b.tax_rate == Decimal("0.08")
