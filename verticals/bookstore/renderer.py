"""Template engine renderer for the bookstore vertical.

Turns purchase results, price breakdowns and inventory reports into
markdown receipts.
"""

from typing import Any, Dict

from core.engine.template_engine import (
    fmt_int,
    fmt_money,
    fmt_pct,
    render_generic,
    register_renderer,
)


def _breakdown_lines(b: Dict[str, Any]) -> list[str]:
    lines = [
        "| Item | Qty | Unit Price | Line Total |",
        "|------|-----|------------|------------|",
    ]
    for item in b["items"]:
        line_total = item["unit_price"] * item["quantity"]
        lines.append(
            f"| Book #{item['book_id']} | {item['quantity']} | "
            f"{fmt_money(item['unit_price'])} | {fmt_money(line_total)} |"
        )

    lines.append("")
    lines.append(f"- **Subtotal:** {fmt_money(b['subtotal'])}")
    if b["coupon_applied"]:
        lines.append(f"- **Discount ({b['coupon_code']}):** -{fmt_money(b['discount'])}")
    lines.append(f"- **Shipping ({b['shipping_option']}):** {fmt_money(b['shipping'])}")
    lines.append(f"- **Tax ({fmt_pct(b['tax_rate'])}):** {fmt_money(b['tax'])}")
    lines.append(f"- **Total:** {fmt_money(b['total'])}")
    return lines


def render_bookstore(name: str, result: Dict[str, Any]) -> str:
    """Render bookstore results into markdown."""
    # -- Confirmation --
    if result.get("success") is True and "transaction_id" in result:
        lines = ["## Order Confirmed\n", f"**Transaction:** `{result['transaction_id']}`\n"]
        lines.extend(_breakdown_lines(result["breakdown"]))
        alerts = result.get("low_stock_alerts") or []
        if alerts:
            lines.append(f"\n**Low Stock ({len(alerts)}):**")
            for a in alerts:
                lines.append(f"- {a['title']} ({a['remaining']} remaining)")
        return "\n".join(lines)

    # -- Failure --
    if result.get("success") is False:
        lines = [
            "## Purchase Failed\n",
            f"**Reason:** {result['message']}",
            f"**Stage:** {result.get('failed_at') or 'N/A'}",
        ]
        if result.get("breakdown"):
            lines.append("")
            lines.extend(_breakdown_lines(result["breakdown"]))
        return "\n".join(lines)

    # -- Breakdown --
    if "subtotal" in result and "total" in result:
        return "\n".join(["## Price Breakdown\n", *_breakdown_lines(result)])

    # -- Inventory --
    if "total_units" in result and "out_of_stock" in result:
        lines = ["## Inventory Report\n"]
        lines.append(f"- **Total Titles:** {fmt_int(result['total_titles'])}")
        lines.append(f"- **Total Units:** {fmt_int(result['total_units'])}")
        lines.append(f"- **Inventory Value:** {fmt_money(result['total_inventory_value'])}")

        oos = result["out_of_stock"]
        if oos:
            lines.append(f"\n**Out of Stock ({len(oos)}):**")
            for b in oos:
                lines.append(f"- {b['title']}")

        low = result["low_stock"]
        if low:
            lines.append(f"\n**Low Stock ({len(low)}):**")
            for b in low:
                lines.append(f"- {b['title']} ({b['stock']} remaining)")

        return "\n".join(lines)

    return render_generic(name, result)


# Auto-register on import
register_renderer("bookstore", render_bookstore)
