"""Dataclass-based domain configuration pattern.

The bookstore defines its tax rate, coupon table, shipping fees and stock
thresholds as frozen dataclasses. Lookup tables are exposed through
``MappingProxyType`` so callers can read them but never edit them.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping


# ---------------------------------------------------------------------------
# Static lookup tables
# ---------------------------------------------------------------------------

PERCENT = "percent"
FLAT = "flat"


@dataclass(frozen=True)
class CouponRule:
    """A named discount: percent-of-subtotal or a flat amount."""

    type: str
    value: Decimal


DEFAULT_COUPONS: Mapping[str, CouponRule] = MappingProxyType({
    "SAVE10": CouponRule(type=PERCENT, value=Decimal("10")),  # 10% off
    "FLAT5": CouponRule(type=FLAT, value=Decimal("5")),       # $5 off
})

DEFAULT_SHIPPING_OPTIONS: Mapping[str, Decimal] = MappingProxyType({
    "standard": Decimal("5"),
    "express": Decimal("15"),
    "pickup": Decimal("0"),
})


# ---------------------------------------------------------------------------
# Nested config sections
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PricingConfig:
    """Pricing rules: tax, coupons and shipping fees."""

    tax_rate: Decimal = Decimal("0.10")
    coupons: Mapping[str, CouponRule] = field(default_factory=lambda: DEFAULT_COUPONS)
    shipping_options: Mapping[str, Decimal] = field(
        default_factory=lambda: DEFAULT_SHIPPING_OPTIONS
    )
    default_shipping: str = "standard"


@dataclass(frozen=True)
class InventoryConfig:
    """Inventory thresholds."""

    low_stock_threshold: int = 1


@dataclass(frozen=True)
class PaymentConfig:
    """Simulated payment settings."""

    success_rate: float = 0.9
    transaction_prefix: str = "tx-"


# ---------------------------------------------------------------------------
# Top-level domain config
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BookstoreConfig:
    """Complete configuration for the bookstore checkout.

    Usage::

        config = BookstoreConfig.default()
        fee = config.pricing.shipping_options["express"]
    """

    pricing: PricingConfig = field(default_factory=PricingConfig)
    inventory: InventoryConfig = field(default_factory=InventoryConfig)
    payment: PaymentConfig = field(default_factory=PaymentConfig)

    @classmethod
    def default(cls) -> "BookstoreConfig":
        """Create config with all defaults."""
        return cls()

    @classmethod
    def from_env(cls, prefix: str = "BOOKSTORE_") -> "BookstoreConfig":
        """Create config from environment variables.

        Example: BOOKSTORE_TAX_RATE=0.08 BOOKSTORE_LOW_STOCK_THRESHOLD=3
        """
        import os

        pricing = PricingConfig()
        tax_rate = os.getenv(f"{prefix}TAX_RATE")
        if tax_rate:
            pricing = PricingConfig(tax_rate=Decimal(tax_rate))

        inventory = InventoryConfig()
        threshold = os.getenv(f"{prefix}LOW_STOCK_THRESHOLD")
        if threshold:
            inventory = InventoryConfig(low_stock_threshold=int(threshold))

        payment = PaymentConfig()
        success_rate = os.getenv(f"{prefix}PAYMENT_SUCCESS_RATE")
        if success_rate:
            payment = PaymentConfig(success_rate=float(success_rate))

        return cls(pricing=pricing, inventory=inventory, payment=payment)
