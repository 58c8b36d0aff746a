"""Test markdown rendering of checkout results."""
import logging
from core.engine.template_engine import TemplateEngine, fmt_money, fmt_pct
from core.observability.logging_setup import setup_logging
from verticals.bookstore.payment import FixedOutcomeGateway
from verticals.bookstore.service import BookstoreService


def test_money_and_pct_helpers():
    from decimal import Decimal
    assert fmt_money(Decimal("1234.5")) == "$1,234.50"
    assert fmt_money(None) == "N/A"
    assert fmt_pct(Decimal("0.10")) == "10.0%"


def test_bookstore_renderer_registered():
    BookstoreService()
    assert "bookstore" in TemplateEngine.list_verticals()


def test_render_confirmation():
    shop = BookstoreService(gateway=FixedOutcomeGateway(succeed=True))
    res = shop.complete_purchase("ai", 5, 1, {"coupon_code": "FLAT5"})
    md = shop.render(res)
    assert "## Order Confirmed" in md
    assert res.transaction_id in md
    assert "Discount (FLAT5)" in md
    assert "Introduction to AI (0 remaining)" in md


def test_render_failure():
    shop = BookstoreService(gateway=FixedOutcomeGateway(succeed=False))
    md = shop.render(shop.complete_purchase("python", 2, 1))
    assert "## Purchase Failed" in md
    assert "**Stage:** payment" in md
    assert "$35.00" in md


def test_render_breakdown_and_report():
    shop = BookstoreService()
    shop.add_to_cart(1, 2)
    md = shop.render(shop.calculate_total(shipping_option="express"))
    assert "## Price Breakdown" in md
    assert "**Total:** $82.50" in md

    report = shop.render(shop.inventory_report(threshold=2))
    assert "## Inventory Report" in report
    assert "Introduction to AI (1 remaining)" in report


def test_render_unknown_vertical_is_generic():
    md = TemplateEngine.render("stats", {"count": 3}, "library")
    assert md.startswith("## stats")


def test_setup_logging_level():
    logger = setup_logging("bookstore-test", level="debug")
    assert logger.level == logging.DEBUG
