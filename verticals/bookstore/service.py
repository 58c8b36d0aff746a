"""Bookstore service: the library-call surface.

One ``BookstoreService`` owns one store, one configuration and one payment
gateway. Separate instances never share state.
"""

from decimal import Decimal
from typing import Any, Mapping, Optional

from core.engine.template_engine import TemplateEngine
from patterns.domain_config import BookstoreConfig
from verticals.bookstore import renderer  # noqa: F401  (registers the renderer)
from verticals.bookstore.cart import add_to_cart
from verticals.bookstore.checkout import PurchaseResult, complete_purchase
from verticals.bookstore.inventory import inventory_report, update_inventory
from verticals.bookstore.models.schemas import (
    Book,
    Breakdown,
    CartLine,
    InventoryReport,
    PaymentOptions,
    PaymentResult,
)
from verticals.bookstore.payment import PaymentGateway, SimulatedPaymentGateway, process_payment
from verticals.bookstore.pricing import calculate_total
from verticals.bookstore.repository import BookStore


class BookstoreService:
    """Search, cart, pricing, payment, inventory and checkout for one session.

    Usage::

        shop = BookstoreService(gateway=FixedOutcomeGateway(succeed=True))
        result = shop.complete_purchase("python", 2, 1, {"coupon_code": "SAVE10"})
    """

    def __init__(
        self,
        store: Optional[BookStore] = None,
        config: Optional[BookstoreConfig] = None,
        gateway: Optional[PaymentGateway] = None,
    ):
        self.config = config or BookstoreConfig.default()
        self.store = store or BookStore()
        self.gateway = gateway or SimulatedPaymentGateway.from_config(self.config.payment)

    # -- Read-only constants --

    @property
    def tax_rate(self) -> Decimal:
        return self.config.pricing.tax_rate

    @property
    def shipping_options(self) -> Mapping[str, Decimal]:
        return self.config.pricing.shipping_options

    # -- Catalog and cart --

    def search(self, query: str | None = "") -> list[Book]:
        return self.store.search(query)

    def add_to_cart(self, book_id: int, quantity: int) -> list[CartLine]:
        return add_to_cart(self.store, book_id, quantity)

    def clear_cart(self) -> None:
        self.store.clear_cart()

    # -- Pricing and payment --

    def calculate_total(
        self,
        cart: Any = None,
        coupon_code: str | None = None,
        shipping_option: str | None = "standard",
    ) -> Breakdown:
        """Price ``cart``, or the current cart when none is given."""
        items = self.store.cart_lines() if cart is None else cart
        return calculate_total(
            items,
            coupon_code=coupon_code,
            shipping_option=shipping_option,
            pricing=self.config.pricing,
        )

    def process_payment(
        self,
        total: Decimal | float | int,
        options: PaymentOptions | Mapping[str, Any] | None = None,
    ) -> PaymentResult:
        return process_payment(total, options, self.gateway)

    # -- Inventory --

    def update_inventory(self, cart: Any = None) -> list[Book]:
        """Commit ``cart``, or the current cart when none is given."""
        items = self.store.cart_lines() if cart is None else cart
        return update_inventory(self.store, items)

    def inventory_report(self, threshold: int | None = None) -> InventoryReport:
        if threshold is None:
            threshold = self.config.inventory.low_stock_threshold
        return inventory_report(self.store, threshold)

    # -- Checkout --

    def complete_purchase(
        self,
        query: str,
        book_id: int,
        quantity: int,
        options: PaymentOptions | Mapping[str, Any] | None = None,
    ) -> PurchaseResult:
        return complete_purchase(
            self.store,
            query,
            book_id,
            quantity,
            options=options,
            gateway=self.gateway,
            config=self.config,
        )

    def render(self, result: Any, name: str = "bookstore") -> str:
        """Markdown for a confirmation, failure, breakdown or report."""
        return TemplateEngine.render(name, result, "bookstore")

    # -- Test accessors --

    def get_books(self) -> list[Book]:
        return self.store.list_books()

    def get_cart(self) -> list[CartLine]:
        return self.store.cart_lines()

    def reset_store(self) -> None:
        self.store.reset()
