"""Pydantic value types for the checkout flow.

Every model is frozen: anything handed back to a caller is an immutable
snapshot and cannot alias the store's internal state.
"""

from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Catalog and cart
# ---------------------------------------------------------------------------

class Book(_Snapshot):
    id: int
    title: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    stock: int = Field(0, ge=0)


class CartLine(_Snapshot):
    book_id: int
    quantity: int = Field(..., gt=0)
    unit_price: Decimal = Field(..., ge=0)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


# ---------------------------------------------------------------------------
# Pricing
# ---------------------------------------------------------------------------

class Breakdown(_Snapshot):
    """Pricing result for a cart. Never stored."""

    items: list[CartLine]
    subtotal: Decimal
    discount: Decimal
    shipping: Decimal
    taxable: Decimal
    tax_rate: Decimal
    tax: Decimal
    total: Decimal
    coupon_applied: bool
    coupon_code: Optional[str] = None
    shipping_option: str


# ---------------------------------------------------------------------------
# Payment
# ---------------------------------------------------------------------------

class PaymentOptions(_Snapshot):
    """Options bag for payment and the purchase flow.

    ``simulate`` forces the outcome regardless of the configured gateway.
    """

    method: str = "card"
    simulate: Optional[Literal["success", "fail"]] = None
    coupon_code: Optional[str] = None
    shipping_option: str = "standard"


class PaymentResult(_Snapshot):
    success: bool
    transaction_id: Optional[str] = None
    error: Optional[str] = None


# ---------------------------------------------------------------------------
# Purchase outcomes
# ---------------------------------------------------------------------------

class LowStockAlert(_Snapshot):
    book_id: int
    title: str
    remaining: int


class PurchaseConfirmation(_Snapshot):
    success: Literal[True] = True
    message: str = "Purchase completed successfully"
    transaction_id: str
    breakdown: Breakdown
    items: list[CartLine]
    low_stock_alerts: list[LowStockAlert] = Field(default_factory=list)
    states: list[str] = Field(default_factory=list)


class PurchaseFailure(_Snapshot):
    success: Literal[False] = False
    message: str
    error_code: str
    failed_at: Optional[str] = None
    breakdown: Optional[Breakdown] = None
    transaction_id: None = None
    states: list[str] = Field(default_factory=list)


class InventoryReport(_Snapshot):
    total_titles: int
    total_units: int
    total_inventory_value: Decimal
    out_of_stock: list[Book]
    low_stock: list[Book]
    threshold: int
