"""Purchase orchestrator.

Runs search validation, cart add, pricing, payment and inventory commit as
a ``PurchaseWorkflow``. Every failure becomes a ``PurchaseFailure``; this
module never lets an exception reach its caller.

On any failure, the cart and the catalog are put back to what they held
before the purchase started. Inventory is only touched once payment has
succeeded with a transaction id.
"""

import logging
import uuid
from typing import Any, Mapping, Optional

from patterns.domain_config import BookstoreConfig
from patterns.rules_engine import check_selection_in_results
from patterns.workflow_states import PurchaseState, PurchaseWorkflow
from verticals.bookstore.cart import add_to_cart
from verticals.bookstore.errors import BookstoreError, PaymentFailedError, SearchMismatchError
from verticals.bookstore.inventory import low_stock_alerts, update_inventory
from verticals.bookstore.models.schemas import (
    Book,
    Breakdown,
    CartLine,
    PaymentOptions,
    PurchaseConfirmation,
    PurchaseFailure,
)
from verticals.bookstore.payment import PaymentGateway, coerce_options, process_payment
from verticals.bookstore.pricing import calculate_total
from verticals.bookstore.repository import BookStore

logger = logging.getLogger(__name__)

PurchaseResult = PurchaseConfirmation | PurchaseFailure


def _advance(workflow: PurchaseWorkflow, state: PurchaseState, **metadata: Any) -> None:
    workflow.transition(state, metadata=metadata)
    logger.debug("%s -> %s", workflow.workflow_id, state.value)


def _failure(
    workflow: PurchaseWorkflow,
    message: str,
    error_code: str,
    breakdown: Optional[Breakdown],
) -> PurchaseFailure:
    failed_at = workflow.fail(message)
    logger.warning(
        "%s failed at %s (%s): %s", workflow.workflow_id, failed_at.value, error_code, message
    )
    return PurchaseFailure(
        message=message,
        error_code=error_code,
        failed_at=failed_at.value,
        breakdown=breakdown,
        states=workflow.visited_states,
    )


def complete_purchase(
    store: BookStore,
    query: str,
    book_id: int,
    quantity: int,
    options: PaymentOptions | Mapping[str, Any] | None = None,
    gateway: Optional[PaymentGateway] = None,
    config: Optional[BookstoreConfig] = None,
) -> PurchaseResult:
    """Search, add to cart, price, pay and commit stock in one flow.

    Coupon and shipping choices travel in ``options`` alongside the
    payment settings.
    """
    config = config or BookstoreConfig.default()
    workflow = PurchaseWorkflow(workflow_id=f"purchase-{uuid.uuid4().hex[:8]}")
    cart_before: list[CartLine] = store.cart_lines()
    books_before: list[Book] = store.list_books()
    breakdown: Optional[Breakdown] = None

    try:
        opts = coerce_options(options)

        # 1. Selection must still be in fresh search results
        results = store.search(query)
        selection = check_selection_in_results(book_id, [b.id for b in results])
        if not selection.passed:
            raise SearchMismatchError(selection.message)

        # 2. Cart
        _advance(workflow, PurchaseState.CART_ADD, book_id=book_id, quantity=quantity)
        cart = add_to_cart(store, book_id, quantity)

        # 3. Pricing
        _advance(workflow, PurchaseState.PRICE_CALC)
        breakdown = calculate_total(
            cart,
            coupon_code=opts.coupon_code,
            shipping_option=opts.shipping_option,
            pricing=config.pricing,
        )

        # 4. Payment
        _advance(workflow, PurchaseState.PAYMENT, total=str(breakdown.total))
        payment = process_payment(breakdown.total, opts, gateway)
        if not payment.success:
            reason = f"Payment failed: {payment.error}" if payment.error else "Payment failed"
            raise PaymentFailedError(reason)
        if not payment.transaction_id:
            raise PaymentFailedError("Payment failed: gateway returned no transaction id")

        # 5. Inventory, only after payment succeeded
        _advance(workflow, PurchaseState.INVENTORY_COMMIT, transaction_id=payment.transaction_id)
        update_inventory(store, cart)
        alerts = low_stock_alerts(store, cart, config.inventory.low_stock_threshold)
        confirmation = PurchaseConfirmation(
            transaction_id=payment.transaction_id,
            breakdown=breakdown,
            items=cart,
            low_stock_alerts=alerts,
            states=[*workflow.visited_states, PurchaseState.CONFIRMED.value],
        )
        store.clear_cart()

        _advance(workflow, PurchaseState.CONFIRMED)
    except BookstoreError as e:
        store.replace_books(books_before)
        store.replace_cart(cart_before)
        return _failure(workflow, e.message, e.code, breakdown)
    except Exception as e:
        logger.exception("%s raised an unexpected error", workflow.workflow_id)
        store.replace_books(books_before)
        store.replace_cart(cart_before)
        return _failure(workflow, str(e) or "Unknown error", "unexpected", breakdown)

    logger.info(
        "%s confirmed: transaction %s, total %s",
        workflow.workflow_id, payment.transaction_id, breakdown.total,
    )
    return confirmation
