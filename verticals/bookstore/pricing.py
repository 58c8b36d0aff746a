"""Pricing engine: a pure function of a cart snapshot and options.

Order of operations is fixed: subtotal, discount, shipping, tax, total.
Each rounded value is rounded at its own step only; the discount is taken
from the raw subtotal.
"""

from collections.abc import Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from pydantic import ValidationError

from patterns.domain_config import FLAT, PERCENT, PricingConfig
from verticals.bookstore.errors import InvalidInputError
from verticals.bookstore.models.schemas import Breakdown, CartLine

CENTS = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    """Round half away from zero to 2 decimal places."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def coerce_lines(items: Any) -> list[CartLine]:
    """Accept CartLine models or plain mappings; reject anything else."""
    if isinstance(items, (str, bytes, Mapping)) or not isinstance(items, Sequence):
        raise InvalidInputError("Cart must be a list of cart lines")
    try:
        return [
            item if isinstance(item, CartLine) else CartLine.model_validate(item)
            for item in items
        ]
    except ValidationError as e:
        raise InvalidInputError(f"Invalid cart line: {e.errors()[0]['msg']}") from e


def compute_discount(subtotal: Decimal, coupon_code: str | None, pricing: PricingConfig) -> Decimal | None:
    """Discount for a coupon, or None when the code is unknown or missing."""
    if not coupon_code or coupon_code not in pricing.coupons:
        return None
    coupon = pricing.coupons[coupon_code]
    if coupon.type == PERCENT:
        return round_money(subtotal * coupon.value / Decimal(100))
    if coupon.type == FLAT:
        return min(subtotal, coupon.value)
    return None


def calculate_total(
    items: Any,
    coupon_code: str | None = None,
    shipping_option: str | None = "standard",
    pricing: PricingConfig | None = None,
) -> Breakdown:
    """Compute the full price breakdown for a cart."""
    pricing = pricing or PricingConfig()
    lines = coerce_lines(items)

    subtotal = sum((line.line_total for line in lines), Decimal(0))

    discount = compute_discount(subtotal, coupon_code, pricing)
    coupon_applied = discount is not None
    if discount is None:
        discount = Decimal(0)

    if shipping_option in pricing.shipping_options:
        charged_option = shipping_option
    else:
        charged_option = pricing.default_shipping
    shipping = pricing.shipping_options[charged_option]

    taxable = max(Decimal(0), subtotal - discount) + shipping
    tax = round_money(taxable * pricing.tax_rate)
    total = round_money(taxable + tax)

    return Breakdown(
        items=lines,
        subtotal=round_money(subtotal),
        discount=round_money(discount),
        shipping=shipping,
        taxable=round_money(taxable),
        tax_rate=pricing.tax_rate,
        tax=tax,
        total=total,
        coupon_applied=coupon_applied,
        coupon_code=coupon_code if coupon_applied else None,
        shipping_option=charged_option,
    )
